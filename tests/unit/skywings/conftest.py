from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from skywings.booking.domain.entity import Booking
from skywings.booking.domain.enum import BookingStatus
from skywings.booking.domain.value_object import (
    BookingReference,
    FlightSnapshot,
    Passenger,
)
from skywings.booking.infrastructure.in_memory_booking_repository import (
    InMemoryBookingRepository,
)
from skywings.context import AppContext
from skywings.offer.domain.entity import FlightOffer
from skywings.offer.domain.enum import TravelClass
from skywings.offer.domain.value_object import (
    FlightNumber,
    IataCode,
    IsoDuration,
    Segment,
)
from skywings.offer.infrastructure.in_memory_offer_cache import InMemoryOfferCache
from skywings.shared.config import Settings
from skywings.shared.domain import IsoDateTime, Money


@pytest.fixture
def create_offer():
    """FlightOffer を生成する Factory fixture（Factories as fixtures パターン）

    via を指定すると乗り継ぎ1回の2区間になる。
    """

    def _factory(
        offer_id: str = "1",
        price: str = "150.00",
        currency: str = "USD",
        origin: str = "JFK",
        destination: str = "LAX",
        carrier: str = "AA",
        via: str | None = None,
        validating_airline_codes: tuple[str, ...] = ("AA",),
    ) -> FlightOffer:
        if via is None:
            legs = [(origin, destination, "2025-06-01T08:00:00", "2025-06-01T11:30:00")]
        else:
            legs = [
                (origin, via, "2025-06-01T08:00:00", "2025-06-01T10:00:00"),
                (via, destination, "2025-06-01T11:00:00", "2025-06-01T13:30:00"),
            ]
        segments = tuple(
            Segment(
                origin=IataCode(leg_origin),
                destination=IataCode(leg_destination),
                departure=IsoDateTime.from_string(departure),
                arrival=IsoDateTime.from_string(arrival),
                carrier_code=carrier,
                flight_number=FlightNumber.of(carrier, str(100 + i)),
            )
            for i, (leg_origin, leg_destination, departure, arrival) in enumerate(legs)
        )
        return FlightOffer(
            id=offer_id,
            origin=segments[0].origin,
            destination=segments[-1].destination,
            departure=segments[0].departure,
            arrival=segments[-1].arrival,
            price=Money.of(price, currency),
            airline_code=carrier,
            flight_number=segments[0].flight_number,
            segments=segments,
            travel_class=TravelClass.ECONOMY,
            duration=IsoDuration("PT5H30M"),
            validating_airline_codes=validating_airline_codes,
        )

    return _factory


@pytest.fixture
def create_raw_offer():
    """Amadeus の flight-offer（レスポンスの data 要素）を生成する Factory fixture"""

    def _factory(
        offer_id: str = "1",
        total: str = "420.00",
        currency: str = "USD",
        route: tuple[str, ...] = ("JFK", "LAX"),
        carrier: str = "AA",
        validating: list[str] | None = None,
        cabin: str | None = "ECONOMY",
    ) -> dict:
        segments = []
        for i, (seg_origin, seg_destination) in enumerate(zip(route, route[1:])):
            segments.append(
                {
                    "departure": {
                        "iataCode": seg_origin,
                        "at": f"2025-06-01T{8 + i * 3:02d}:00:00",
                    },
                    "arrival": {
                        "iataCode": seg_destination,
                        "at": f"2025-06-01T{10 + i * 3:02d}:00:00",
                    },
                    "carrierCode": carrier,
                    "number": str(100 + i),
                    "duration": "PT2H",
                }
            )
        raw: dict = {
            "id": offer_id,
            "itineraries": [{"duration": "PT5H30M", "segments": segments}],
            "price": {"total": total, "currency": currency},
            "validatingAirlineCodes": validating or [carrier],
        }
        if cabin is not None:
            raw["travelerPricings"] = [{"fareDetailsBySegment": [{"cabin": cabin}]}]
        return raw

    return _factory


@pytest.fixture
def create_passenger():
    """Passenger を生成する Factory fixture"""

    def _factory(
        first_name: str = "John",
        last_name: str = "Doe",
        email: str | None = "john.doe@example.com",
        phone: str | None = "+1234567890",
        date_of_birth: date | None = None,
    ) -> Passenger:
        return Passenger(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone,
            date_of_birth=date_of_birth,
        )

    return _factory


@pytest.fixture
def create_booking(create_passenger):
    """Booking を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        reference: str = "SKY123456",
        status: BookingStatus = BookingStatus.CONFIRMED,
        origin: str = "JFK",
        destination: str = "LAX",
        departure: str = "2025-06-01T08:00:00",
        created_at: str = "2025-05-01T12:00:00+00:00",
        passengers: list[Passenger] | None = None,
        total_price: Decimal = Decimal("150.00"),
        cancelled_at: str | None = None,
        cancellation_reason: str | None = None,
    ) -> Booking:
        if status == BookingStatus.CANCELLED:
            cancelled_at = cancelled_at or "2025-05-02T12:00:00+00:00"
            cancellation_reason = cancellation_reason or "Change of plans"
        return Booking(
            id=BookingReference(reference),
            flight=FlightSnapshot(
                origin=IataCode(origin),
                destination=IataCode(destination),
                departure=IsoDateTime.from_string(departure),
                arrival=IsoDateTime.from_string("2025-06-01T11:30:00"),
                airline_code="AA",
                flight_number=FlightNumber("AA100"),
            ),
            passengers=passengers or [create_passenger()],
            total_price=Money.usd(total_price),
            created_at=IsoDateTime.from_string(created_at),
            status=status,
            cancelled_at=IsoDateTime.from_string(cancelled_at) if cancelled_at else None,
            cancellation_reason=cancellation_reason,
        )

    return _factory


@pytest.fixture
def offer_cache():
    return InMemoryOfferCache()


@pytest.fixture
def booking_repository():
    return InMemoryBookingRepository()


@pytest.fixture
def mock_dispatcher():
    """NotificationDispatcher のモックフィクスチャ"""
    return MagicMock()


@pytest.fixture
def app_context(offer_cache, booking_repository):
    """メモリ上の実装とモックで構成した AppContext"""
    return AppContext(
        offer_cache=offer_cache,
        offer_provider=MagicMock(),
        booking_repository=booking_repository,
        notifier=MagicMock(),
        settings=Settings(booking_store="memory"),
    )


@pytest.fixture
def lambda_context():
    """Logger.inject_lambda_context が参照する属性を持つ LambdaContext のスタブ"""
    context = MagicMock()
    context.function_name = "test-function"
    context.memory_limit_in_mb = 128
    context.invoked_function_arn = (
        "arn:aws:lambda:us-east-1:123456789012:function:test-function"
    )
    context.aws_request_id = "test-request-id"
    return context
