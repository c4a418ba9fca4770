from __future__ import annotations

from pydantic import BaseModel

from skywings.offer.domain.entity import FlightOffer
from skywings.offer.domain.value_object import Segment


class SegmentData(BaseModel):
    """区間のレスポンスモデル"""

    origin: str
    destination: str
    departure: str
    arrival: str
    airline: str
    flight_number: str
    duration: str | None


class OfferData(BaseModel):
    """フライトオファーのレスポンスモデル"""

    id: str
    origin: str
    destination: str
    departure: str
    arrival: str
    price: str
    currency: str
    airline: str
    flight_number: str
    travel_class: str
    stops: int
    duration: str
    duration_minutes: int
    segments: list[SegmentData]


class SearchFlightsResponse(BaseModel):
    """フライト検索のレスポンスモデル

    結果が空の場合は message と code で理由を示す。
    """

    offers: list[OfferData]
    message: str | None = None
    code: str | None = None


def _to_segment_data(segment: Segment) -> SegmentData:
    return SegmentData(
        origin=str(segment.origin),
        destination=str(segment.destination),
        departure=str(segment.departure),
        arrival=str(segment.arrival),
        airline=segment.carrier_code,
        flight_number=str(segment.flight_number),
        duration=str(segment.duration) if segment.duration else None,
    )


def to_offer_data(offer: FlightOffer) -> OfferData:
    """FlightOffer をレスポンスモデルに変換する"""
    return OfferData(
        id=offer.id,
        origin=str(offer.origin),
        destination=str(offer.destination),
        departure=str(offer.departure),
        arrival=str(offer.arrival),
        price=str(offer.price.amount),
        currency=str(offer.price.currency),
        airline=offer.airline_code,
        flight_number=str(offer.flight_number),
        travel_class=offer.travel_class.value,
        stops=offer.stops,
        duration=str(offer.duration),
        duration_minutes=offer.duration.total_minutes,
        segments=[_to_segment_data(s) for s in offer.segments],
    )
