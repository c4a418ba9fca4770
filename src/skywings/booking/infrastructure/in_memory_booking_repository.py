from __future__ import annotations

import threading
from collections.abc import Sequence

from skywings.booking.domain.entity import Booking
from skywings.booking.domain.enum import BookingStatus
from skywings.booking.domain.repository import (
    BOOKING_LIST_LIMIT,
    PASSENGER_SEARCH_LIMIT,
    BookingRepository,
)
from skywings.booking.domain.value_object import (
    BookingFilter,
    BookingReference,
    Passenger,
    PassengerQuery,
)
from skywings.booking.infrastructure.booking_codec import (
    booking_from_dict,
    booking_to_dict,
)
from skywings.shared.domain import IsoDateTime
from skywings.shared.domain.exception import (
    AlreadyCancelledException,
    BookingNotFoundException,
    DuplicateResourceException,
    OptimisticLockException,
)


class InMemoryBookingRepository(BookingRepository):
    """プロセス内メモリを使用した BookingRepository の具象実装

    ローカル実行・テスト用。条件付き更新はロック内で判定と書き込みを行う。
    エンティティは辞書として保持し、呼び出し側との共有を避ける。
    """

    def __init__(self) -> None:
        self._items: dict[str, dict] = {}
        self._lock = threading.Lock()

    def insert(self, booking: Booking) -> None:
        key = str(booking.reference)
        with self._lock:
            if key in self._items:
                raise DuplicateResourceException(f"Booking already exists: {key}")
            self._items[key] = booking_to_dict(booking)

    def find_by_id(self, reference: BookingReference) -> Booking | None:
        with self._lock:
            item = self._items.get(str(reference))
        return booking_from_dict(item) if item else None

    def exists(self, reference: BookingReference) -> bool:
        with self._lock:
            return str(reference) in self._items

    def is_empty(self) -> bool:
        with self._lock:
            return not self._items

    def list(
        self, booking_filter: BookingFilter, limit: int = BOOKING_LIST_LIMIT
    ) -> list[Booking]:
        bookings = [b for b in self._all() if booking_filter.matches(b)]
        return bookings[:limit]

    def search_by_passenger(
        self, query: PassengerQuery, limit: int = PASSENGER_SEARCH_LIMIT
    ) -> list[Booking]:
        bookings = [b for b in self._all() if query.matches(b)]
        return bookings[:limit]

    def update_status_to_cancelled(
        self,
        reference: BookingReference,
        reason: str,
        expected_status: BookingStatus,
        cancelled_at: IsoDateTime,
    ) -> Booking:
        key = str(reference)
        with self._lock:
            item = self._items.get(key)
            if item is None:
                raise BookingNotFoundException(key)
            booking = booking_from_dict(item)
            if booking.status == BookingStatus.CANCELLED:
                raise AlreadyCancelledException(key)
            if booking.status != expected_status:
                raise OptimisticLockException(
                    f"Booking status conflict: expected {expected_status.value}, "
                    f"reference={key}"
                )
            booking.cancel(reason, cancelled_at)
            self._items[key] = booking_to_dict(booking)
        return booking

    def replace_passengers(
        self, reference: BookingReference, passengers: Sequence[Passenger]
    ) -> Booking:
        key = str(reference)
        with self._lock:
            item = self._items.get(key)
            if item is None:
                raise BookingNotFoundException(key)
            booking = booking_from_dict(item)
            booking.replace_passengers(passengers)
            self._items[key] = booking_to_dict(booking)
        return booking

    def _all(self) -> list[Booking]:
        """作成日時の降順"""
        with self._lock:
            items = list(self._items.values())
        bookings = [booking_from_dict(item) for item in items]
        bookings.sort(key=lambda b: b.created_at.value, reverse=True)
        return bookings
