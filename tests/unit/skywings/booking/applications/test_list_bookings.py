from datetime import date
from unittest.mock import MagicMock

import pytest

from skywings.booking.applications.list_bookings import ListBookingsService
from skywings.booking.domain.enum import BookingStatus
from skywings.booking.domain.repository import (
    BOOKING_LIST_LIMIT,
    PASSENGER_SEARCH_LIMIT,
)
from skywings.booking.domain.value_object import BookingFilter
from skywings.shared.domain.exception import ValidationException


@pytest.fixture
def populated_repository(booking_repository, create_booking, create_passenger):
    booking_repository.insert(
        create_booking(reference="SKY100001", created_at="2025-05-01T00:00:00+00:00")
    )
    booking_repository.insert(
        create_booking(
            reference="SKY100002",
            status=BookingStatus.CANCELLED,
            origin="SFO",
            destination="JFK",
            created_at="2025-05-02T00:00:00+00:00",
            passengers=[
                create_passenger(
                    first_name="Jane",
                    last_name="Smith",
                    email="jane@example.com",
                    phone="+1987654321",
                )
            ],
        )
    )
    booking_repository.insert(
        create_booking(
            reference="SKY100003",
            departure="2025-07-01T08:00:00",
            created_at="2025-05-03T00:00:00+00:00",
        )
    )
    return booking_repository


class TestListBookingsService:
    """ListBookingsService のテスト"""

    def test_lists_newest_first(self, populated_repository):
        bookings = ListBookingsService(populated_repository).list(BookingFilter())

        assert [str(b.reference) for b in bookings] == [
            "SKY100003",
            "SKY100002",
            "SKY100001",
        ]

    @pytest.mark.parametrize(
        "booking_filter, expected",
        [
            (BookingFilter(status=BookingStatus.CANCELLED), ["SKY100002"]),
            (BookingFilter(origin="JFK"), ["SKY100003", "SKY100001"]),
            (BookingFilter(departure_date=date(2025, 7, 1)), ["SKY100003"]),
            (BookingFilter(email="jane@example.com"), ["SKY100002"]),
            (
                BookingFilter(status=BookingStatus.CONFIRMED, last_name="Smith"),
                [],
            ),
        ],
    )
    def test_filters_are_combined(self, populated_repository, booking_filter, expected):
        bookings = ListBookingsService(populated_repository).list(booking_filter)

        assert [str(b.reference) for b in bookings] == expected

    def test_list_limit(self):
        repository = MagicMock()

        ListBookingsService(repository).list(BookingFilter())

        assert repository.list.call_args[1]["limit"] == BOOKING_LIST_LIMIT

    def test_search_matches_any_parameter(self, populated_repository):
        """いずれかの条件に一致すれば結果に含まれる"""
        bookings = ListBookingsService(populated_repository).search(
            email="nobody@example.com", phone="+1987654321"
        )

        assert [str(b.reference) for b in bookings] == ["SKY100002"]

    def test_search_limit(self):
        repository = MagicMock()

        ListBookingsService(repository).search(last_name="Doe")

        assert repository.search_by_passenger.call_args[1]["limit"] == (
            PASSENGER_SEARCH_LIMIT
        )

    def test_search_without_parameters(self, booking_repository):
        with pytest.raises(ValidationException):
            ListBookingsService(booking_repository).search()
