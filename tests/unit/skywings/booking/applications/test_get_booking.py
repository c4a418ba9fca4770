import pytest

from skywings.booking.applications.get_booking import GetBookingService
from skywings.booking.domain.value_object import BookingReference
from skywings.shared.domain.exception import BookingNotFoundException


class TestGetBookingService:
    """GetBookingService のテスト"""

    def test_returns_booking(self, booking_repository, create_booking):
        booking_repository.insert(create_booking(reference="SKY654321"))

        booking = GetBookingService(booking_repository).get(
            BookingReference("SKY654321")
        )

        assert str(booking.reference) == "SKY654321"

    def test_missing_booking(self, booking_repository):
        with pytest.raises(BookingNotFoundException) as exc_info:
            GetBookingService(booking_repository).get(BookingReference("SKY000000"))

        assert exc_info.value.code == "BOOKING_NOT_FOUND"
