import typing

import pytest

from skywings.booking.applications.list_bookings import ListBookingsService
from skywings.booking.domain.entity import Booking
from skywings.booking.domain.repository import BookingRepository
from skywings.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from skywings.booking.infrastructure.in_memory_booking_repository import (
    InMemoryBookingRepository,
)


class TestListMethodAnnotations:
    """list メソッドを持つクラスの戻り値アノテーションのテスト

    クラス内で定義した list メソッドが組み込みの list を隠さないこと。
    """

    @pytest.mark.parametrize(
        ("owner", "method"),
        [
            (BookingRepository, "list"),
            (BookingRepository, "search_by_passenger"),
            (InMemoryBookingRepository, "list"),
            (InMemoryBookingRepository, "search_by_passenger"),
            (DynamoDBBookingRepository, "list"),
            (DynamoDBBookingRepository, "search_by_passenger"),
            (ListBookingsService, "list"),
            (ListBookingsService, "search"),
        ],
    )
    def test_return_annotation_is_list_of_bookings(self, owner, method):
        hints = typing.get_type_hints(getattr(owner, method))

        assert hints["return"] == list[Booking]
