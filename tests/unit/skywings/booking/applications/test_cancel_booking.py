from unittest.mock import MagicMock

import pytest

from skywings.booking.applications.cancel_booking import CancelBookingService
from skywings.booking.domain.enum import BookingStatus
from skywings.booking.domain.value_object import BookingReference
from skywings.shared.domain import IsoDateTime
from skywings.shared.domain.exception import (
    AlreadyCancelledException,
    BookingNotFoundException,
    ValidationException,
)

REFERENCE = BookingReference("SKY123456")
NOW = IsoDateTime.from_string("2025-05-10T09:00:00+00:00")


@pytest.fixture
def service(booking_repository, mock_dispatcher):
    return CancelBookingService(booking_repository, mock_dispatcher, clock=lambda: NOW)


class TestCancelBookingService:
    """CancelBookingService のテスト"""

    def test_cancels_confirmed_booking(
        self, service, booking_repository, mock_dispatcher, create_booking
    ):
        # Arrange
        original = create_booking()
        booking_repository.insert(original)

        # Act
        booking = service.cancel(REFERENCE, "  Change of plans  ")

        # Assert
        assert booking.status == BookingStatus.CANCELLED
        assert booking.cancellation_reason == "Change of plans"
        assert booking.cancelled_at == NOW
        stored = booking_repository.find_by_id(REFERENCE)
        assert stored.status == BookingStatus.CANCELLED
        assert booking.total_price == original.total_price
        assert stored.total_price == original.total_price
        mock_dispatcher.booking_cancelled.assert_called_once_with(booking)

    def test_empty_reason_does_not_touch_storage(self, mock_dispatcher):
        repository = MagicMock()
        service = CancelBookingService(repository, mock_dispatcher)

        with pytest.raises(ValidationException) as exc_info:
            service.cancel(REFERENCE, "   ")

        assert exc_info.value.field == "reason"
        repository.update_status_to_cancelled.assert_not_called()

    def test_already_cancelled_keeps_original_cancellation(
        self, service, booking_repository, mock_dispatcher, create_booking
    ):
        # Arrange
        booking_repository.insert(create_booking(status=BookingStatus.CANCELLED))

        # Act
        with pytest.raises(AlreadyCancelledException):
            service.cancel(REFERENCE, "Another reason")

        # Assert
        stored = booking_repository.find_by_id(REFERENCE)
        assert stored.cancellation_reason == "Change of plans"
        assert stored.cancelled_at == IsoDateTime.from_string(
            "2025-05-02T12:00:00+00:00"
        )
        mock_dispatcher.booking_cancelled.assert_not_called()

    def test_missing_booking(self, service):
        with pytest.raises(BookingNotFoundException):
            service.cancel(REFERENCE, "Change of plans")

    def test_cancelled_at_is_not_earlier_than_created_at(
        self, mock_dispatcher, create_booking
    ):
        """時計が作成日時より前を指してもキャンセル日時は作成日時に揃える"""
        # Arrange
        booking = create_booking(created_at="2025-05-01T12:00:00+00:00")
        repository = MagicMock()
        repository.find_by_id.return_value = booking
        early = IsoDateTime.from_string("2025-05-01T11:59:00+00:00")
        service = CancelBookingService(repository, mock_dispatcher, clock=lambda: early)

        # Act
        service.cancel(REFERENCE, "Change of plans")

        # Assert
        repository.update_status_to_cancelled.assert_called_once_with(
            REFERENCE,
            reason="Change of plans",
            expected_status=BookingStatus.CONFIRMED,
            cancelled_at=booking.created_at,
        )

    def test_missing_booking_does_not_attempt_update(self, mock_dispatcher):
        repository = MagicMock()
        repository.find_by_id.return_value = None
        service = CancelBookingService(repository, mock_dispatcher)

        with pytest.raises(BookingNotFoundException):
            service.cancel(REFERENCE, "Change of plans")

        repository.update_status_to_cancelled.assert_not_called()
        mock_dispatcher.booking_cancelled.assert_not_called()
