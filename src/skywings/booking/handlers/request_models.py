from datetime import date

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from skywings.booking.domain.enum import BookingStatus
from skywings.booking.domain.factory import PassengerDetails, PaymentDetails
from skywings.booking.domain.value_object import BookingFilter, BookingReference
from skywings.shared.domain.exception import ValidationException
from skywings.shared.utils import blank_to_none, normalize_code


class _CamelModel(BaseModel):
    """camelCase / snake_case のどちらでも受け付ける"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PassengerRequest(_CamelModel):
    """搭乗者の入力スキーマ

    氏名の必須チェックはドメイン層で行う。
    """

    first_name: str = ""
    last_name: str = ""
    email: str | None = None
    phone: str | None = None
    gender: str | None = None
    date_of_birth: date | None = None

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def empty_as_none(cls, v):
        return blank_to_none(v)

    def to_details(self) -> PassengerDetails:
        return PassengerDetails(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            phone=self.phone,
            gender=self.gender,
            date_of_birth=self.date_of_birth,
        )


class PaymentRequest(_CamelModel):
    """支払い情報の入力スキーマ（形式チェックはドメイン層で行う）"""

    cardholder_name: str = Field(
        default="", validation_alias=AliasChoices("cardholderName", "cardName", "cardholder_name")
    )
    card_number: str = ""
    expiry_month: str = ""
    expiry_year: str = ""
    cvv: str = ""

    model_config = ConfigDict(hide_input_in_errors=True)

    @field_validator("expiry_month", "expiry_year", "cvv", "card_number", mode="before")
    @classmethod
    def to_str(cls, v):
        """数値で送られてきた場合も文字列として扱う"""
        if isinstance(v, int):
            return str(v)
        return v

    def to_details(self) -> PaymentDetails:
        return PaymentDetails(
            cardholder_name=self.cardholder_name,
            card_number=self.card_number,
            expiry_month=self.expiry_month,
            expiry_year=self.expiry_year,
            cvv=self.cvv,
        )


class CreateBookingRequest(_CamelModel):
    """予約作成リクエストスキーマ"""

    offer_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("offerId", "flightId", "offer_id"),
        description="検索結果のオファーID",
    )
    passengers: list[PassengerRequest] = Field(default_factory=list)
    payment: PaymentRequest

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "offerId": "1",
                    "passengers": [
                        {
                            "firstName": "John",
                            "lastName": "Doe",
                            "email": "john.doe@example.com",
                        }
                    ],
                    "payment": {
                        "cardholderName": "John Doe",
                        "cardNumber": "4111111111111111",
                        "expiryMonth": "12",
                        "expiryYear": "2030",
                        "cvv": "123",
                    },
                }
            ]
        }
    }


class CancelBookingRequest(BaseModel):
    """予約キャンセルリクエストスキーマ（理由の必須チェックはユースケースで行う）"""

    reason: str = ""


class AmendPassengersRequest(BaseModel):
    """搭乗者変更リクエストスキーマ"""

    passengers: list[PassengerRequest] = Field(default_factory=list)


class ListBookingsQuery(BaseModel):
    """予約一覧の絞り込み条件（クエリ文字列）"""

    status: BookingStatus | None = None
    origin: str | None = Field(
        default=None, validation_alias=AliasChoices("origin", "from")
    )
    destination: str | None = Field(
        default=None, validation_alias=AliasChoices("destination", "to")
    )
    departure_date: date | None = Field(
        default=None,
        validation_alias=AliasChoices("departure_date", "departureDate", "date"),
    )
    email: str | None = None
    last_name: str | None = Field(
        default=None, validation_alias=AliasChoices("last_name", "lastName")
    )

    @field_validator("*", mode="before")
    @classmethod
    def empty_as_none(cls, v):
        return blank_to_none(v)

    @field_validator("status", "origin", "destination", mode="before")
    @classmethod
    def normalize(cls, v):
        return normalize_code(v)

    def to_filter(self) -> BookingFilter:
        return BookingFilter(
            status=self.status,
            origin=self.origin,
            destination=self.destination,
            departure_date=self.departure_date,
            email=self.email.strip() if self.email else None,
            last_name=self.last_name.strip() if self.last_name else None,
        )


class SearchBookingsQuery(BaseModel):
    """搭乗者による予約検索条件（クエリ文字列）"""

    email: str | None = None
    last_name: str | None = Field(
        default=None, validation_alias=AliasChoices("last_name", "lastName")
    )
    phone: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def empty_as_none(cls, v):
        v = blank_to_none(v)
        return v.strip() if isinstance(v, str) else v


def parse_reference(path_parameters: dict | None) -> BookingReference:
    """パスパラメータから予約番号を取り出す"""
    value = (path_parameters or {}).get("reference") or ""
    try:
        return BookingReference(value.strip().upper())
    except ValueError as e:
        raise ValidationException(str(e), field="reference") from e
