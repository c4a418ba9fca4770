import re
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class FlightNumber:
    """便名（例: AA1234, B6123）

    航空会社の IATA コードは数字を含むことがある（B6, 9W など）。
    """

    value: str

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^([A-Z0-9]{2})(\d{1,4})$")

    def __post_init__(self) -> None:
        normalized = self.value.strip().upper()
        if not self.PATTERN.match(normalized):
            raise ValueError(
                f"Invalid flight number: {self.value}. "
                "Expected a 2-character carrier code followed by 1-4 digits"
            )
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value

    @classmethod
    def of(cls, carrier_code: str, number: str) -> "FlightNumber":
        """Amadeus の carrierCode と number を連結する"""
        return cls(f"{carrier_code}{number}")
