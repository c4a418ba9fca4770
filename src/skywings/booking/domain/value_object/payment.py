from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class PaymentSummary:
    """永続化・ログ出力してよい支払い情報（マスク済み）"""

    cardholder_name: str
    masked_card_number: str

    @property
    def card_last4(self) -> str:
        return self.masked_card_number[-4:]


@dataclass(frozen=True, repr=False)
class PaymentIntent:
    """支払い情報

    形式のみ検証し、決済処理は行わない。カード番号と CVV は平文で
    永続化・ログ出力しないため、repr もマスクする。
    """

    cardholder_name: str
    card_number: str
    expiry_month: str
    expiry_year: str
    cvv: str

    CARD_NUMBER_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^\d{16,19}$")
    CVV_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^\d{3,4}$")

    def __post_init__(self) -> None:
        card_number = re.sub(r"[\s-]", "", self.card_number or "")
        object.__setattr__(self, "card_number", card_number)

        if len((self.cardholder_name or "").strip()) < 3:
            raise ValueError("Cardholder name must be at least 3 characters")
        if not self.CARD_NUMBER_PATTERN.match(card_number):
            raise ValueError("Card number must be 16 to 19 digits")
        if not (self.expiry_month or "").strip():
            raise ValueError("Expiry month is required")
        if not (self.expiry_year or "").strip():
            raise ValueError("Expiry year is required")
        if not self.CVV_PATTERN.match(self.cvv or ""):
            raise ValueError("CVV must be 3 or 4 digits")

    def __repr__(self) -> str:
        return (
            f"PaymentIntent(cardholder_name={self.cardholder_name!r}, "
            f"card_number={self.masked_card_number!r}, cvv='***')"
        )

    @property
    def masked_card_number(self) -> str:
        return "*" * (len(self.card_number) - 4) + self.card_number[-4:]

    def summary(self) -> PaymentSummary:
        """マスク済みの支払い情報"""
        return PaymentSummary(
            cardholder_name=self.cardholder_name.strip(),
            masked_card_number=self.masked_card_number,
        )
