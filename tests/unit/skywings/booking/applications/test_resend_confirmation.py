import pytest

from skywings.booking.applications.resend_confirmation import (
    ResendConfirmationService,
)
from skywings.booking.domain.enum import BookingStatus
from skywings.booking.domain.value_object import BookingReference
from skywings.shared.domain.exception import BookingNotFoundException

REFERENCE = BookingReference("SKY123456")


class TestResendConfirmationService:
    """ResendConfirmationService のテスト"""

    def test_resends_to_primary_passenger(
        self, booking_repository, mock_dispatcher, create_booking, create_passenger
    ):
        # Arrange
        booking_repository.insert(
            create_booking(
                passengers=[
                    create_passenger(email="first@example.com"),
                    create_passenger(first_name="Jane", email="second@example.com"),
                ]
            )
        )

        # Act
        sent_to = ResendConfirmationService(booking_repository, mock_dispatcher).resend(
            REFERENCE
        )

        # Assert
        assert sent_to == "first@example.com"
        mock_dispatcher.booking_confirmed.assert_called_once()

    def test_does_not_modify_booking(
        self, booking_repository, mock_dispatcher, create_booking
    ):
        booking_repository.insert(create_booking(status=BookingStatus.CANCELLED))

        ResendConfirmationService(booking_repository, mock_dispatcher).resend(REFERENCE)

        stored = booking_repository.find_by_id(REFERENCE)
        assert stored.status == BookingStatus.CANCELLED
        assert stored.version == 1

    def test_primary_passenger_without_email(
        self, booking_repository, mock_dispatcher, create_booking, create_passenger
    ):
        """メールアドレスがなくてもエラーにせず、送信先なしとして返す"""
        booking_repository.insert(
            create_booking(passengers=[create_passenger(email=None)])
        )

        sent_to = ResendConfirmationService(booking_repository, mock_dispatcher).resend(
            REFERENCE
        )

        assert sent_to is None
        assert booking_repository.find_by_id(REFERENCE).version == 1

    def test_missing_booking(self, booking_repository, mock_dispatcher):
        with pytest.raises(BookingNotFoundException):
            ResendConfirmationService(booking_repository, mock_dispatcher).resend(
                REFERENCE
            )
