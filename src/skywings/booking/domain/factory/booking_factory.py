from collections.abc import Sequence
from datetime import date
from typing import NotRequired, TypedDict

from skywings.booking.domain.entity import Booking
from skywings.booking.domain.enum import BookingStatus
from skywings.booking.domain.value_object import (
    BookingReference,
    FlightSnapshot,
    Passenger,
    PaymentIntent,
    PaymentSummary,
)
from skywings.offer.domain.entity import FlightOffer
from skywings.shared.domain import IsoDateTime
from skywings.shared.domain.exception import ValidationException


class PassengerDetails(TypedDict):
    """搭乗者の入力データ構造"""

    first_name: str
    last_name: str
    email: NotRequired[str | None]
    phone: NotRequired[str | None]
    gender: NotRequired[str | None]
    date_of_birth: NotRequired[date | None]


class PaymentDetails(TypedDict):
    """支払い情報の入力データ構造"""

    cardholder_name: str
    card_number: str
    expiry_month: str
    expiry_year: str
    cvv: str


class BookingFactory:
    """フライト予約エンティティのファクトリ

    - プリミティブ型から Value Object への変換
    - 合計金額の算出（1人あたりの価格 × 人数）
    - 初期状態の設定
    """

    def create(
        self,
        reference: BookingReference,
        offer: FlightOffer,
        passengers: Sequence[Passenger],
        payment: PaymentSummary | None,
        created_at: IsoDateTime,
    ) -> Booking:
        """新規予約エンティティを生成する

        Args:
            reference: 採番済みの予約番号
            offer: キャッシュから解決したフライトオファー
            passengers: 検証済みの搭乗者一覧
            payment: マスク済みの支払い情報
            created_at: 作成日時

        Returns:
            Booking: 生成された予約エンティティ（PENDING状態）
        """
        return Booking(
            id=reference,
            flight=FlightSnapshot.from_offer(offer),
            passengers=passengers,
            total_price=offer.price.multiply(len(passengers)),
            created_at=created_at,
            status=BookingStatus.PENDING,
            payment=payment,
        )

    @staticmethod
    def passengers_from(details: Sequence[PassengerDetails]) -> tuple[Passenger, ...]:
        """入力データから搭乗者一覧を生成する"""
        if not details:
            raise ValidationException(
                "At least one passenger is required", field="passengers"
            )

        passengers = []
        for index, detail in enumerate(details):
            try:
                passengers.append(
                    Passenger(
                        first_name=detail.get("first_name", ""),
                        last_name=detail.get("last_name", ""),
                        email=detail.get("email"),
                        phone=detail.get("phone"),
                        gender=detail.get("gender"),
                        date_of_birth=detail.get("date_of_birth"),
                    )
                )
            except ValueError as e:
                raise ValidationException(
                    f"passengers[{index}]: {e}", field=f"passengers[{index}]"
                ) from e
        return tuple(passengers)

    @staticmethod
    def payment_from(details: PaymentDetails) -> PaymentIntent:
        """入力データから支払い情報を生成する（形式のみ検証）"""
        try:
            return PaymentIntent(
                cardholder_name=details.get("cardholder_name", ""),
                card_number=details.get("card_number", ""),
                expiry_month=details.get("expiry_month", ""),
                expiry_year=details.get("expiry_year", ""),
                cvv=details.get("cvv", ""),
            )
        except ValueError as e:
            raise ValidationException(f"payment: {e}", field="payment") from e
