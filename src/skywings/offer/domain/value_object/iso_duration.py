import re
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class IsoDuration:
    """所要時間（ISO 8601 duration 形式）

    外部 API の値をそのまま保持する。例: PT2H30M, P1DT2H
    """

    value: str

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(
        r"^P(?:(?P<days>\d+)D)?"
        r"(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+)S)?)?$"
    )

    def __post_init__(self) -> None:
        self._parts()

    def __str__(self) -> str:
        return self.value

    def _parts(self) -> dict[str, int]:
        match = self.PATTERN.match(self.value)
        if self.value in ("P", "PT") or match is None:
            raise ValueError(f"Invalid ISO 8601 duration: {self.value}")
        return {k: int(v) for k, v in match.groupdict().items() if v}

    @property
    def total_minutes(self) -> int:
        """分単位の合計（秒は切り捨て）"""
        parts = self._parts()
        return (
            parts.get("days", 0) * 24 * 60
            + parts.get("hours", 0) * 60
            + parts.get("minutes", 0)
        )
