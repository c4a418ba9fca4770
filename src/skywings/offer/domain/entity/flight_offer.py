from dataclasses import dataclass

from skywings.offer.domain.enum import TravelClass
from skywings.offer.domain.value_object import (
    FlightNumber,
    IataCode,
    IsoDuration,
    Segment,
)
from skywings.shared.domain import IsoDateTime, Money
from skywings.shared.domain.exception import BusinessRuleViolationException


@dataclass(frozen=True)
class FlightOffer:
    """フライトオファー

    外部 API から取得した予約可能な旅程。キャッシュに保持される間のみ有効で、
    生成後は変更されない。
    """

    id: str
    origin: IataCode
    destination: IataCode
    departure: IsoDateTime
    arrival: IsoDateTime
    price: Money
    airline_code: str
    flight_number: FlightNumber
    segments: tuple[Segment, ...]
    travel_class: TravelClass
    duration: IsoDuration
    validating_airline_codes: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.id:
            raise BusinessRuleViolationException("Flight offer id cannot be empty")
        self._validate_segments()

    def _validate_segments(self) -> None:
        """区間が時系列順で、旅程の出発地・目的地と一致すること"""
        if not self.segments:
            raise BusinessRuleViolationException(
                f"Flight offer {self.id} has no segments"
            )
        if self.segments[0].origin != self.origin:
            raise BusinessRuleViolationException(
                f"First segment must depart from {self.origin}"
            )
        if self.segments[-1].destination != self.destination:
            raise BusinessRuleViolationException(
                f"Last segment must arrive at {self.destination}"
            )
        for previous, current in zip(self.segments, self.segments[1:]):
            if current.departure.is_before(previous.arrival):
                raise BusinessRuleViolationException(
                    f"Segments of flight offer {self.id} are not in chronological order"
                )

    @property
    def stops(self) -> int:
        """乗り継ぎ回数"""
        return len(self.segments) - 1

    @property
    def route(self) -> str:
        """経路（最初の区間の出発地 → 最後の区間の到着地）"""
        return f"{self.segments[0].origin} → {self.segments[-1].destination}"

    def is_operated_by(self, airline: str) -> bool:
        """指定航空会社が販売する旅程かどうか"""
        code = airline.strip().upper()
        codes = self.validating_airline_codes or (self.airline_code,)
        return code in codes

    def arrives_at(self, destination: IataCode) -> bool:
        """最終区間の到着空港が指定の空港と完全一致するか"""
        return self.segments[-1].destination == destination
