from skywings.booking.domain.repository import BookingRepository
from skywings.booking.domain.value_object import BookingReference
from skywings.notification.applications import NotificationDispatcher
from skywings.shared.domain.exception import BookingNotFoundException


class ResendConfirmationService:
    """予約確認の再送ユースケース（予約は変更しない）"""

    def __init__(
        self, repository: BookingRepository, dispatcher: NotificationDispatcher
    ) -> None:
        self._repository = repository
        self._dispatcher = dispatcher

    def resend(self, reference: BookingReference) -> str | None:
        """先頭の搭乗者のメールアドレスへ再送し、送信先を返す

        送信の成否は結果に影響しない。メールアドレスがなければ送信せず None を返す。
        """
        booking = self._repository.find_by_id(reference)
        if booking is None:
            raise BookingNotFoundException(str(reference))

        self._dispatcher.booking_confirmed(booking)
        return booking.primary_passenger.email
