from collections.abc import Callable
from datetime import timedelta
from decimal import Decimal

from aws_lambda_powertools import Logger

from skywings.booking.domain.entity import Booking
from skywings.booking.domain.enum import BookingStatus
from skywings.booking.domain.repository import BookingRepository
from skywings.booking.domain.value_object import (
    BookingReference,
    FlightSnapshot,
    Passenger,
)
from skywings.offer.domain.value_object import FlightNumber, IataCode
from skywings.shared.domain import IsoDateTime, Money
from skywings.shared.domain.exception import DuplicateResourceException

logger = Logger(child=True)


class SeedSampleBookingsService:
    """サンプル予約の投入ユースケース（予約が1件も無い場合のみ）"""

    def __init__(
        self,
        repository: BookingRepository,
        clock: Callable[[], IsoDateTime] = IsoDateTime.now,
    ) -> None:
        self._repository = repository
        self._clock = clock

    def seed(self) -> list[Booking]:
        """投入した予約を返す（既に予約がある場合は空）"""
        if not self._repository.is_empty():
            logger.info("Bookings already exist, skipping seed")
            return []

        seeded = []
        for booking in self._sample_bookings(self._clock()):
            try:
                self._repository.insert(booking)
            except DuplicateResourceException:
                continue
            seeded.append(booking)
        logger.info("Sample bookings seeded", extra={"count": len(seeded)})
        return seeded

    @staticmethod
    def _sample_bookings(now: IsoDateTime) -> list[Booking]:
        def days(n: float) -> IsoDateTime:
            return now.plus(timedelta(days=n))

        def flight(
            origin: str, destination: str, departs_in_days: int, hours: int, number: str
        ) -> FlightSnapshot:
            departure = days(departs_in_days)
            return FlightSnapshot(
                origin=IataCode(origin),
                destination=IataCode(destination),
                departure=departure,
                arrival=departure.plus(timedelta(hours=hours)),
                airline_code=number[:2],
                flight_number=FlightNumber(number),
            )

        return [
            Booking(
                id=BookingReference("SKY123456"),
                flight=flight("JFK", "LAX", 30, 6, "AA1234"),
                passengers=[
                    Passenger(
                        first_name="John",
                        last_name="Doe",
                        email="john.doe@example.com",
                        phone="+1234567890",
                    )
                ],
                total_price=Money.usd(Decimal("349.99")),
                created_at=days(-15),
                status=BookingStatus.CONFIRMED,
            ),
            Booking(
                id=BookingReference("SKY789012"),
                flight=flight("SFO", "NYC", -5, 5, "UA5678"),
                passengers=[
                    Passenger(
                        first_name="Jane",
                        last_name="Smith",
                        email="jane.smith@example.com",
                        phone="+1987654321",
                    ),
                    Passenger(
                        first_name="Bob",
                        last_name="Smith",
                        email="bob.smith@example.com",
                        phone="+1987654322",
                    ),
                ],
                total_price=Money.usd(Decimal("599.98")),
                created_at=days(-20),
                status=BookingStatus.CANCELLED,
                cancelled_at=days(-10),
                cancellation_reason="Change of plans",
            ),
            Booking(
                id=BookingReference("SKY185612"),
                flight=flight("LHR", "CDG", 15, 2, "BA9012"),
                passengers=[
                    Passenger(
                        first_name="Alice",
                        last_name="Johnson",
                        email="alice.johnson@example.com",
                        phone="+4412345678",
                    )
                ],
                total_price=Money.of("199.99", "EUR"),
                created_at=days(-2),
                status=BookingStatus.CONFIRMED,
            ),
        ]
