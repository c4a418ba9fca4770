from aws_lambda_powertools import Logger

from skywings.booking.domain.entity import Booking
from skywings.notification.domain import ConfirmationNotifier

logger = Logger(child=True)


class NotificationDispatcher:
    """通知の送信を試みる（失敗しても予約処理は成功として扱う）

    送信できたかどうかを bool で返す。連絡先メールアドレスが無い場合は送信しない。
    """

    def __init__(self, notifier: ConfirmationNotifier) -> None:
        self._notifier = notifier

    def booking_confirmed(self, booking: Booking) -> bool:
        recipient = booking.primary_passenger.email
        if not recipient:
            logger.info(
                "Skipping confirmation: primary passenger has no email",
                extra={"reference": str(booking.reference)},
            )
            return False
        try:
            self._notifier.send_booking_confirmation(booking, recipient)
        except Exception:
            logger.exception(
                "Failed to send booking confirmation",
                extra={"reference": str(booking.reference)},
            )
            return False
        return True

    def booking_cancelled(self, booking: Booking) -> bool:
        recipient = booking.primary_passenger.email
        if not recipient:
            return False
        try:
            self._notifier.send_cancellation_notice(booking, recipient)
        except Exception:
            logger.exception(
                "Failed to send cancellation notice",
                extra={"reference": str(booking.reference)},
            )
            return False
        return True
