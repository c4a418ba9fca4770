from dataclasses import dataclass
from datetime import date

from skywings.offer.domain.enum import TravelClass
from skywings.offer.domain.value_object.iata_code import IataCode


@dataclass(frozen=True)
class SearchCriteria:
    """フライト検索条件"""

    origin: IataCode
    destination: IataCode
    departure_date: date
    adults: int = 1
    travel_class: TravelClass = TravelClass.ECONOMY
    airline: str | None = None
    direct_only: bool = False
    return_date: date | None = None
    max_results: int = 20

    def __post_init__(self) -> None:
        if self.adults < 1:
            raise ValueError("At least one passenger is required")
        if self.return_date is not None and self.return_date < self.departure_date:
            raise ValueError("Return date must not be before departure date")
