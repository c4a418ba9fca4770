from abc import ABC, abstractmethod

from skywings.booking.domain.entity import Booking


class ConfirmationNotifier(ABC):
    """予約に関する通知の送信先"""

    @abstractmethod
    def send_booking_confirmation(self, booking: Booking, recipient: str) -> None:
        """予約確認を送信する"""
        raise NotImplementedError

    @abstractmethod
    def send_cancellation_notice(self, booking: Booking, recipient: str) -> None:
        """キャンセル通知を送信する"""
        raise NotImplementedError
