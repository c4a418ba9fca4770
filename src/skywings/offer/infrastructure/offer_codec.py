"""FlightOffer とプリミティブ辞書の相互変換（キャッシュ永続化用）"""

from skywings.offer.domain.entity import FlightOffer
from skywings.offer.domain.enum import TravelClass
from skywings.offer.domain.value_object import (
    FlightNumber,
    IataCode,
    IsoDuration,
    Segment,
)
from skywings.shared.domain import IsoDateTime, Money


def offer_to_dict(offer: FlightOffer) -> dict:
    return {
        "id": offer.id,
        "origin": str(offer.origin),
        "destination": str(offer.destination),
        "departure": str(offer.departure),
        "arrival": str(offer.arrival),
        "price_amount": str(offer.price.amount),
        "price_currency": str(offer.price.currency),
        "airline_code": offer.airline_code,
        "flight_number": str(offer.flight_number),
        "travel_class": offer.travel_class.value,
        "duration": str(offer.duration),
        "validating_airline_codes": list(offer.validating_airline_codes),
        "segments": [_segment_to_dict(segment) for segment in offer.segments],
    }


def offer_from_dict(data: dict) -> FlightOffer:
    return FlightOffer(
        id=data["id"],
        origin=IataCode(data["origin"]),
        destination=IataCode(data["destination"]),
        departure=IsoDateTime.from_string(data["departure"]),
        arrival=IsoDateTime.from_string(data["arrival"]),
        price=Money.of(data["price_amount"], data["price_currency"]),
        airline_code=data["airline_code"],
        flight_number=FlightNumber(data["flight_number"]),
        segments=tuple(_segment_from_dict(s) for s in data["segments"]),
        travel_class=TravelClass(data["travel_class"]),
        duration=IsoDuration(data["duration"]),
        validating_airline_codes=tuple(data.get("validating_airline_codes", [])),
    )


def _segment_to_dict(segment: Segment) -> dict:
    return {
        "origin": str(segment.origin),
        "destination": str(segment.destination),
        "departure": str(segment.departure),
        "arrival": str(segment.arrival),
        "carrier_code": segment.carrier_code,
        "flight_number": str(segment.flight_number),
        "duration": str(segment.duration) if segment.duration else None,
    }


def _segment_from_dict(data: dict) -> Segment:
    return Segment(
        origin=IataCode(data["origin"]),
        destination=IataCode(data["destination"]),
        departure=IsoDateTime.from_string(data["departure"]),
        arrival=IsoDateTime.from_string(data["arrival"]),
        carrier_code=data["carrier_code"],
        flight_number=FlightNumber(data["flight_number"]),
        duration=IsoDuration(data["duration"]) if data.get("duration") else None,
    )
