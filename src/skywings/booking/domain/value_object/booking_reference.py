from __future__ import annotations

import re
import secrets
from dataclasses import dataclass
from typing import Callable, ClassVar


@dataclass(frozen=True)
class BookingReference:
    """予約番号

    "SKY" + 6桁の数字。例: SKY123456
    """

    value: str

    PREFIX: ClassVar[str] = "SKY"
    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^SKY\d{6}$")

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.PATTERN.match(self.value):
            raise ValueError(
                f"Invalid booking reference: {self.value}. "
                "Expected format: SKY + 6 digits (e.g. SKY123456)"
            )

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(
        cls, randbelow: Callable[[int], int] = secrets.randbelow
    ) -> BookingReference:
        """ランダムな予約番号を生成する（100000-999999）

        一意性は保証しないため、呼び出し側で重複を確認する。
        """
        return cls(value=f"{cls.PREFIX}{100000 + randbelow(900000)}")
