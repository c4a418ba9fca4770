import re
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class IataCode:
    """IATA 空港コード

    大文字3文字のみ受け付ける。例: JFK, LAX, LHR
    """

    value: str

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^[A-Z]{3}$")

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.PATTERN.match(self.value):
            raise ValueError(
                f"Invalid IATA code format: {self.value}. "
                "Please use 3-letter airport codes (e.g., JFK, LAX, LHR)"
            )

    def __str__(self) -> str:
        return self.value
