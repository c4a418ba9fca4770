"""Amadeus Flight Offers Search のレスポンスを FlightOffer に正規化する"""

from skywings.offer.domain.entity import FlightOffer
from skywings.offer.domain.enum import TravelClass
from skywings.offer.domain.value_object import (
    FlightNumber,
    IataCode,
    IsoDuration,
    Segment,
)
from skywings.shared.domain import IsoDateTime, Money


def to_flight_offer(raw: dict, requested_class: TravelClass) -> FlightOffer:
    """Amadeus の flight-offer を FlightOffer に変換する

    往復検索でも先頭の旅程（往路）のみを扱う。所要時間は旅程単位の値を
    そのまま使い、時刻から再計算しない。
    """
    itinerary = raw["itineraries"][0]
    segments = tuple(_to_segment(segment) for segment in itinerary["segments"])
    first, last = segments[0], segments[-1]

    return FlightOffer(
        id=str(raw["id"]),
        origin=first.origin,
        destination=last.destination,
        departure=first.departure,
        arrival=last.arrival,
        price=Money.of(raw["price"]["total"], raw["price"]["currency"]),
        airline_code=first.carrier_code,
        flight_number=first.flight_number,
        segments=segments,
        travel_class=_cabin(raw, requested_class),
        duration=IsoDuration(itinerary["duration"]),
        validating_airline_codes=tuple(raw.get("validatingAirlineCodes") or ()),
    )


def _to_segment(raw: dict) -> Segment:
    carrier_code = raw["carrierCode"]
    return Segment(
        origin=IataCode(raw["departure"]["iataCode"]),
        destination=IataCode(raw["arrival"]["iataCode"]),
        departure=IsoDateTime.from_string(raw["departure"]["at"]),
        arrival=IsoDateTime.from_string(raw["arrival"]["at"]),
        carrier_code=carrier_code,
        flight_number=FlightNumber.of(carrier_code, raw["number"]),
        duration=IsoDuration(raw["duration"]) if raw.get("duration") else None,
    )


def _cabin(raw: dict, requested_class: TravelClass) -> TravelClass:
    """運賃詳細のキャビンクラス。取得できない場合は検索時の指定クラス"""
    try:
        cabin = raw["travelerPricings"][0]["fareDetailsBySegment"][0]["cabin"]
        return TravelClass(cabin)
    except (KeyError, IndexError, ValueError):
        return requested_class
