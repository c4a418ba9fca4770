from collections.abc import Iterable

from skywings.booking.domain.enum import BookingStatus
from skywings.booking.domain.value_object import (
    BookingReference,
    FlightSnapshot,
    Passenger,
    PaymentSummary,
)
from skywings.shared.domain import AggregateRoot, IsoDateTime, Money
from skywings.shared.domain.exception import (
    AlreadyCancelledException,
    BusinessRuleViolationException,
    ValidationException,
)


class Booking(AggregateRoot[BookingReference]):
    """フライト予約

    合計金額は作成時に確定し、以降のキャンセル・搭乗者変更でも変わらない。
    削除はされず、変更はキャンセルと搭乗者の差し替えのみ。
    """

    def __init__(
        self,
        id: BookingReference,
        flight: FlightSnapshot,
        passengers: Iterable[Passenger],
        total_price: Money,
        created_at: IsoDateTime,
        status: BookingStatus = BookingStatus.PENDING,
        cancelled_at: IsoDateTime | None = None,
        cancellation_reason: str | None = None,
        payment: PaymentSummary | None = None,
        version: int = 1,
    ) -> None:
        super().__init__(id, version)

        self._flight = flight
        self._passengers = tuple(passengers)
        self._total_price = total_price
        self._created_at = created_at
        self._status = status
        self._cancelled_at = cancelled_at
        self._cancellation_reason = cancellation_reason
        self._payment = payment

        self._validate_passengers(self._passengers)
        self._validate_cancellation()

    @staticmethod
    def _validate_passengers(passengers: tuple[Passenger, ...]) -> None:
        if not passengers:
            raise ValidationException(
                "At least one passenger is required", field="passengers"
            )

    def _validate_cancellation(self) -> None:
        """キャンセル済みなら理由とキャンセル日時（作成日時以降）を持つこと"""
        if self._status != BookingStatus.CANCELLED:
            return
        if not self._cancellation_reason or self._cancelled_at is None:
            raise BusinessRuleViolationException(
                "Cancelled booking must have a cancellation reason and timestamp"
            )
        if self._cancelled_at.is_before(self._created_at):
            raise BusinessRuleViolationException(
                "Cancellation timestamp must not precede creation timestamp"
            )

    @property
    def reference(self) -> BookingReference:
        return self._id

    @property
    def flight(self) -> FlightSnapshot:
        return self._flight

    @property
    def passengers(self) -> tuple[Passenger, ...]:
        return self._passengers

    @property
    def primary_passenger(self) -> Passenger:
        """連絡先として扱う先頭の搭乗者"""
        return self._passengers[0]

    @property
    def total_price(self) -> Money:
        return self._total_price

    @property
    def created_at(self) -> IsoDateTime:
        return self._created_at

    @property
    def status(self) -> BookingStatus:
        return self._status

    @property
    def cancelled_at(self) -> IsoDateTime | None:
        return self._cancelled_at

    @property
    def cancellation_reason(self) -> str | None:
        return self._cancellation_reason

    @property
    def payment(self) -> PaymentSummary | None:
        return self._payment

    @property
    def is_cancellable(self) -> bool:
        return self._status.can_transition_to(BookingStatus.CANCELLED)

    def confirm(self) -> None:
        """予約を確定する"""
        if self._status == BookingStatus.CONFIRMED:
            return
        if not self._status.can_transition_to(BookingStatus.CONFIRMED):
            raise BusinessRuleViolationException(
                f"Cannot confirm a {self._status.value} booking"
            )
        self._status = BookingStatus.CONFIRMED

    def cancel(self, reason: str, cancelled_at: IsoDateTime) -> None:
        """予約をキャンセルする（取り消し不可）"""
        if not reason or not reason.strip():
            raise ValidationException(
                "Cancellation reason is required", field="reason"
            )
        if self._status == BookingStatus.CANCELLED:
            raise AlreadyCancelledException(str(self._id))
        if not self.is_cancellable:
            raise BusinessRuleViolationException(
                f"Cannot cancel a {self._status.value} booking"
            )
        if cancelled_at.is_before(self._created_at):
            cancelled_at = self._created_at

        self._status = BookingStatus.CANCELLED
        self._cancelled_at = cancelled_at
        self._cancellation_reason = reason.strip()
        self._touch()

    def replace_passengers(self, passengers: Iterable[Passenger]) -> None:
        """搭乗者一覧を丸ごと差し替える（ステータスは変えない）"""
        new_passengers = tuple(passengers)
        self._validate_passengers(new_passengers)
        self._passengers = new_passengers
        self._touch()
