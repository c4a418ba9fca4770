from __future__ import annotations

from dataclasses import dataclass

from skywings.offer.domain.entity import FlightOffer
from skywings.offer.domain.value_object import FlightNumber, IataCode
from skywings.shared.domain import IsoDateTime


@dataclass(frozen=True)
class FlightSnapshot:
    """予約時点のフライト情報のコピー

    オファーはキャッシュから消えるため、参照ではなく値として保持する。
    """

    origin: IataCode
    destination: IataCode
    departure: IsoDateTime
    arrival: IsoDateTime
    airline_code: str
    flight_number: FlightNumber

    @classmethod
    def from_offer(cls, offer: FlightOffer) -> FlightSnapshot:
        """オファーの経路・時刻・航空会社を写し取る"""
        return cls(
            origin=offer.origin,
            destination=offer.destination,
            departure=offer.departure,
            arrival=offer.arrival,
            airline_code=offer.airline_code,
            flight_number=offer.flight_number,
        )
