from enum import Enum
from typing import assert_never


class BookingStatus(str, Enum):
    """予約ステータス

    PENDING → CONFIRMED → CANCELLED の一方向のみ遷移する。
    """

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"

    def can_transition_to(self, target: "BookingStatus") -> bool:
        """指定ステータスへ遷移可能かどうか"""
        match self:
            case BookingStatus.PENDING:
                return target == BookingStatus.CONFIRMED
            case BookingStatus.CONFIRMED:
                return target == BookingStatus.CANCELLED
            case BookingStatus.CANCELLED:
                return False
            case _:
                assert_never(self)
