from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence

from skywings.booking.domain.entity import Booking
from skywings.booking.domain.enum import BookingStatus
from skywings.booking.domain.value_object import (
    BookingFilter,
    BookingReference,
    Passenger,
    PassengerQuery,
)
from skywings.shared.domain import IsoDateTime, Repository

BOOKING_LIST_LIMIT = 100
PASSENGER_SEARCH_LIMIT = 10


class BookingRepository(Repository[Booking, BookingReference]):
    """フライト予約レポジトリ

    予約番号・搭乗者メールアドレス・搭乗者姓・出発日による検索は
    インデックスを使用すること。
    """

    @abstractmethod
    def insert(self, booking: Booking) -> None:
        """新規に永続化する

        Raises:
            DuplicateResourceException: 同じ予約番号が既に存在する
        """
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, reference: BookingReference) -> Booking | None:
        """予約番号で検索"""
        raise NotImplementedError

    @abstractmethod
    def is_empty(self) -> bool:
        """予約が1件も存在しないかどうか"""
        raise NotImplementedError

    @abstractmethod
    def list(
        self, booking_filter: BookingFilter, limit: int = BOOKING_LIST_LIMIT
    ) -> list[Booking]:
        """条件に一致する予約を作成日時の降順で返す"""
        raise NotImplementedError

    @abstractmethod
    def search_by_passenger(
        self, query: PassengerQuery, limit: int = PASSENGER_SEARCH_LIMIT
    ) -> list[Booking]:
        """搭乗者のいずれかの条件に一致する予約を作成日時の降順で返す"""
        raise NotImplementedError

    @abstractmethod
    def update_status_to_cancelled(
        self,
        reference: BookingReference,
        reason: str,
        expected_status: BookingStatus,
        cancelled_at: IsoDateTime,
    ) -> Booking:
        """現在のステータスが expected_status の場合のみキャンセル済みに更新する

        Raises:
            BookingNotFoundException: 予約が存在しない
            AlreadyCancelledException: 既にキャンセル済み
            OptimisticLockException: その他の理由でステータスが一致しない
        """
        raise NotImplementedError

    @abstractmethod
    def replace_passengers(
        self, reference: BookingReference, passengers: Sequence[Passenger]
    ) -> Booking:
        """搭乗者一覧を丸ごと差し替える

        Raises:
            BookingNotFoundException: 予約が存在しない
            OptimisticLockException: 読み出し後に他の更新が行われた
        """
        raise NotImplementedError
