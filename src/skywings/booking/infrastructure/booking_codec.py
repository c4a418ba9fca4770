"""Booking とプリミティブ辞書の相互変換（永続化用）"""

from datetime import date

from skywings.booking.domain.entity import Booking
from skywings.booking.domain.enum import BookingStatus
from skywings.booking.domain.value_object import (
    BookingReference,
    FlightSnapshot,
    Passenger,
    PaymentSummary,
)
from skywings.offer.domain.value_object import FlightNumber, IataCode
from skywings.shared.domain import IsoDateTime, Money


def booking_to_dict(booking: Booking) -> dict:
    flight = booking.flight
    return {
        "reference": str(booking.reference),
        "status": booking.status.value,
        "origin": str(flight.origin),
        "destination": str(flight.destination),
        "departure": str(flight.departure),
        "arrival": str(flight.arrival),
        "airline_code": flight.airline_code,
        "flight_number": str(flight.flight_number),
        "passengers": [passenger_to_dict(p) for p in booking.passengers],
        "price_amount": str(booking.total_price.amount),
        "price_currency": str(booking.total_price.currency),
        "created_at": str(booking.created_at),
        "cancelled_at": str(booking.cancelled_at) if booking.cancelled_at else None,
        "cancellation_reason": booking.cancellation_reason,
        "cardholder_name": booking.payment.cardholder_name
        if booking.payment
        else None,
        "masked_card_number": booking.payment.masked_card_number
        if booking.payment
        else None,
        "version": booking.version,
    }


def booking_from_dict(data: dict) -> Booking:
    payment = None
    if data.get("masked_card_number"):
        payment = PaymentSummary(
            cardholder_name=data["cardholder_name"],
            masked_card_number=data["masked_card_number"],
        )
    return Booking(
        id=BookingReference(data["reference"]),
        flight=FlightSnapshot(
            origin=IataCode(data["origin"]),
            destination=IataCode(data["destination"]),
            departure=IsoDateTime.from_string(data["departure"]),
            arrival=IsoDateTime.from_string(data["arrival"]),
            airline_code=data["airline_code"],
            flight_number=FlightNumber(data["flight_number"]),
        ),
        passengers=[passenger_from_dict(p) for p in data["passengers"]],
        total_price=Money.of(data["price_amount"], data["price_currency"]),
        created_at=IsoDateTime.from_string(data["created_at"]),
        status=BookingStatus(data["status"]),
        cancelled_at=IsoDateTime.from_string(data["cancelled_at"])
        if data.get("cancelled_at")
        else None,
        cancellation_reason=data.get("cancellation_reason"),
        payment=payment,
        version=int(data.get("version", 1)),
    )


def passenger_to_dict(passenger: Passenger) -> dict:
    return {
        "first_name": passenger.first_name,
        "last_name": passenger.last_name,
        "email": passenger.email,
        "phone": passenger.phone,
        "gender": passenger.gender,
        "date_of_birth": passenger.date_of_birth.isoformat()
        if passenger.date_of_birth
        else None,
    }


def passenger_from_dict(data: dict) -> Passenger:
    return Passenger(
        first_name=data["first_name"],
        last_name=data["last_name"],
        email=data.get("email"),
        phone=data.get("phone"),
        gender=data.get("gender"),
        date_of_birth=date.fromisoformat(data["date_of_birth"])
        if data.get("date_of_birth")
        else None,
    )
