from collections.abc import Callable

from aws_lambda_powertools import Logger

from skywings.booking.domain.entity import Booking
from skywings.booking.domain.enum import BookingStatus
from skywings.booking.domain.repository import BookingRepository
from skywings.booking.domain.value_object import BookingReference
from skywings.notification.applications import NotificationDispatcher
from skywings.shared.domain import IsoDateTime
from skywings.shared.domain.exception import (
    BookingNotFoundException,
    ValidationException,
)

logger = Logger(child=True)


class CancelBookingService:
    """予約キャンセルユースケース

    状態の判定はレポジトリの条件付き更新に委ねる。
    キャンセル日時は作成日時より前にならないよう補正する。
    AlreadyCancelledException はリトライせずそのまま返す。
    """

    def __init__(
        self,
        repository: BookingRepository,
        dispatcher: NotificationDispatcher,
        clock: Callable[[], IsoDateTime] = IsoDateTime.now,
    ) -> None:
        self._repository = repository
        self._dispatcher = dispatcher
        self._clock = clock

    def cancel(self, reference: BookingReference, reason: str) -> Booking:
        """予約をキャンセルする

        Raises:
            ValidationException: キャンセル理由が空
            BookingNotFoundException: 予約が存在しない
            AlreadyCancelledException: 既にキャンセル済み
        """
        if not reason or not reason.strip():
            raise ValidationException(
                "Cancellation reason is required", field="reason"
            )

        current = self._repository.find_by_id(reference)
        if current is None:
            raise BookingNotFoundException(str(reference))

        # 作成日時より前にはしない
        cancelled_at = self._clock()
        if cancelled_at.is_before(current.created_at):
            cancelled_at = current.created_at

        booking = self._repository.update_status_to_cancelled(
            reference,
            reason=reason.strip(),
            expected_status=BookingStatus.CONFIRMED,
            cancelled_at=cancelled_at,
        )
        logger.info(
            "Booking cancelled",
            extra={"reference": str(reference), "reason": booking.cancellation_reason},
        )
        self._dispatcher.booking_cancelled(booking)
        return booking
