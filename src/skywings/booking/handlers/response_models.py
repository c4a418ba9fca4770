from __future__ import annotations

from pydantic import BaseModel

from skywings.booking.domain.entity import Booking
from skywings.booking.domain.value_object import Passenger


class FlightData(BaseModel):
    """予約時点のフライト情報"""

    origin: str
    destination: str
    departure: str
    arrival: str
    airline: str
    flight_number: str


class PassengerData(BaseModel):
    first_name: str
    last_name: str
    email: str | None
    phone: str | None
    gender: str | None
    date_of_birth: str | None


class PaymentData(BaseModel):
    """マスク済みの支払い情報"""

    cardholder_name: str
    card_last4: str


class BookingData(BaseModel):
    """予約データのレスポンスモデル"""

    booking_reference: str
    status: str
    created_at: str
    cancelled_at: str | None
    cancellation_reason: str | None
    flight: FlightData
    passengers: list[PassengerData]
    total_price: str
    currency: str
    payment: PaymentData | None


class CreateBookingResponse(BaseModel):
    success: bool = True
    booking_reference: str
    booking: BookingData


class BookingListResponse(BaseModel):
    bookings: list[BookingData]
    count: int


class ResendConfirmationResponse(BaseModel):
    success: bool = True
    sent_to: str | None = None


def _to_passenger_data(passenger: Passenger) -> PassengerData:
    return PassengerData(
        first_name=passenger.first_name,
        last_name=passenger.last_name,
        email=passenger.email,
        phone=passenger.phone,
        gender=passenger.gender,
        date_of_birth=passenger.date_of_birth.isoformat()
        if passenger.date_of_birth
        else None,
    )


def to_booking_data(booking: Booking) -> BookingData:
    """Booking エンティティをレスポンスモデルに変換する"""
    return BookingData(
        booking_reference=str(booking.reference),
        status=booking.status.value,
        created_at=str(booking.created_at),
        cancelled_at=str(booking.cancelled_at) if booking.cancelled_at else None,
        cancellation_reason=booking.cancellation_reason,
        flight=FlightData(
            origin=str(booking.flight.origin),
            destination=str(booking.flight.destination),
            departure=str(booking.flight.departure),
            arrival=str(booking.flight.arrival),
            airline=booking.flight.airline_code,
            flight_number=str(booking.flight.flight_number),
        ),
        passengers=[_to_passenger_data(p) for p in booking.passengers],
        total_price=str(booking.total_price.amount),
        currency=str(booking.total_price.currency),
        payment=PaymentData(
            cardholder_name=booking.payment.cardholder_name,
            card_last4=booking.payment.card_last4,
        )
        if booking.payment
        else None,
    )


def to_booking_list(bookings: list[Booking]) -> dict:
    return BookingListResponse(
        bookings=[to_booking_data(b) for b in bookings], count=len(bookings)
    ).model_dump()
