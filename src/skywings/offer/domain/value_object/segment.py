from dataclasses import dataclass

from skywings.offer.domain.value_object.flight_number import FlightNumber
from skywings.offer.domain.value_object.iata_code import IataCode
from skywings.offer.domain.value_object.iso_duration import IsoDuration
from skywings.shared.domain import IsoDateTime


@dataclass(frozen=True)
class Segment:
    """区間（乗り継ぎ旅程の1フライト）"""

    origin: IataCode
    destination: IataCode
    departure: IsoDateTime
    arrival: IsoDateTime
    carrier_code: str
    flight_number: FlightNumber
    duration: IsoDuration | None = None
