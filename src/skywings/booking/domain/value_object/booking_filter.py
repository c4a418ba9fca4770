from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from skywings.booking.domain.enum import BookingStatus

if TYPE_CHECKING:
    from skywings.booking.domain.entity import Booking


@dataclass(frozen=True)
class BookingFilter:
    """予約一覧の絞り込み条件（指定された条件をすべて満たすもの）"""

    status: BookingStatus | None = None
    origin: str | None = None
    destination: str | None = None
    departure_date: date | None = None
    email: str | None = None
    last_name: str | None = None

    def matches(self, booking: Booking) -> bool:
        if self.status is not None and booking.status != self.status:
            return False
        if self.origin is not None and str(booking.flight.origin) != self.origin:
            return False
        if (
            self.destination is not None
            and str(booking.flight.destination) != self.destination
        ):
            return False
        if (
            self.departure_date is not None
            and booking.flight.departure.date() != self.departure_date
        ):
            return False
        if self.email is not None and not any(
            p.email == self.email for p in booking.passengers
        ):
            return False
        if self.last_name is not None and not any(
            p.last_name == self.last_name for p in booking.passengers
        ):
            return False
        return True


@dataclass(frozen=True)
class PassengerQuery:
    """搭乗者による予約検索条件（いずれかに一致するもの）"""

    email: str | None = None
    last_name: str | None = None
    phone: str | None = None

    def __post_init__(self) -> None:
        if not (self.email or self.last_name or self.phone):
            raise ValueError("Please provide at least one search parameter")

    def matches(self, booking: Booking) -> bool:
        return any(
            (self.email is not None and p.email == self.email)
            or (self.last_name is not None and p.last_name == self.last_name)
            or (self.phone is not None and p.phone == self.phone)
            for p in booking.passengers
        )
