import re
from dataclasses import dataclass
from datetime import date
from typing import ClassVar


@dataclass(frozen=True)
class Passenger:
    """搭乗者

    予約の先頭の搭乗者（primary）の連絡先のみが通知に使われる。
    """

    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None
    gender: str | None = None
    date_of_birth: date | None = None

    EMAIL_PATTERN: ClassVar[re.Pattern[str]] = re.compile(
        r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
    )

    def __post_init__(self) -> None:
        for field in ("first_name", "last_name"):
            value = getattr(self, field)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{field} is required")
            object.__setattr__(self, field, value.strip())

        for field in ("email", "phone", "gender"):
            value = getattr(self, field)
            if isinstance(value, str):
                object.__setattr__(self, field, value.strip() or None)

        if self.email is not None and not self.EMAIL_PATTERN.match(self.email):
            raise ValueError(f"Invalid email address: {self.email}")
