from aws_lambda_powertools import Logger

from skywings.booking.domain.entity import Booking
from skywings.notification.domain import ConfirmationNotifier

logger = Logger(child=True)


class LoggingConfirmationNotifier(ConfirmationNotifier):
    """送信せずにログへ出力するだけの ConfirmationNotifier

    カード情報は出力しない。
    """

    def send_booking_confirmation(self, booking: Booking, recipient: str) -> None:
        logger.info(
            "Booking confirmation sent",
            extra={
                "recipient": recipient,
                "reference": str(booking.reference),
                "route": f"{booking.flight.origin} → {booking.flight.destination}",
                "departure": str(booking.flight.departure),
                "passengers": len(booking.passengers),
                "total_price": str(booking.total_price),
            },
        )

    def send_cancellation_notice(self, booking: Booking, recipient: str) -> None:
        logger.info(
            "Cancellation notice sent",
            extra={
                "recipient": recipient,
                "reference": str(booking.reference),
                "reason": booking.cancellation_reason,
            },
        )
