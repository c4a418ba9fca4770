from __future__ import annotations

from skywings.booking.domain.entity import Booking
from skywings.booking.domain.repository import (
    BOOKING_LIST_LIMIT,
    PASSENGER_SEARCH_LIMIT,
    BookingRepository,
)
from skywings.booking.domain.value_object import BookingFilter, PassengerQuery
from skywings.shared.domain.exception import ValidationException


class ListBookingsService:
    """予約一覧・搭乗者検索ユースケース（管理者向け）"""

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def list(self, booking_filter: BookingFilter) -> list[Booking]:
        """条件をすべて満たす予約を新しい順に最大100件返す"""
        return self._repository.list(booking_filter, limit=BOOKING_LIST_LIMIT)

    def search(
        self,
        email: str | None = None,
        last_name: str | None = None,
        phone: str | None = None,
    ) -> list[Booking]:
        """いずれかの条件に一致する予約を新しい順に最大10件返す"""
        try:
            query = PassengerQuery(email=email, last_name=last_name, phone=phone)
        except ValueError as e:
            raise ValidationException(str(e)) from e
        return self._repository.search_by_passenger(
            query, limit=PASSENGER_SEARCH_LIMIT
        )
