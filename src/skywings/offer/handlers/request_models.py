from datetime import date

from pydantic import AliasChoices, BaseModel, Field, field_validator

from skywings.offer.domain.enum import TravelClass
from skywings.shared.utils import blank_to_none, normalize_code


class SearchFlightsRequest(BaseModel):
    """フライト検索リクエストスキーマ（クエリ文字列）"""

    origin: str = Field(
        ...,
        validation_alias=AliasChoices("origin", "from"),
        description="出発空港の IATA コード",
        examples=["JFK"],
    )

    destination: str = Field(
        ...,
        validation_alias=AliasChoices("destination", "to"),
        description="到着空港の IATA コード",
        examples=["LAX"],
    )

    departure_date: date = Field(
        ...,
        validation_alias=AliasChoices("departure_date", "departureDate", "date"),
        description="出発日",
        examples=["2025-06-01"],
    )

    adults: int = Field(
        default=1,
        ge=1,
        le=9,
        validation_alias=AliasChoices("adults", "passengers"),
        description="搭乗人数",
    )

    travel_class: TravelClass = Field(
        default=TravelClass.ECONOMY,
        validation_alias=AliasChoices("travel_class", "travelClass"),
    )

    airline: str | None = Field(default=None, description="航空会社コード")

    direct_only: bool = Field(
        default=False,
        validation_alias=AliasChoices("direct_only", "directOnly"),
    )

    return_date: date | None = Field(
        default=None,
        validation_alias=AliasChoices("return_date", "returnDate"),
    )

    @field_validator("origin", "destination", "travel_class", mode="before")
    @classmethod
    def normalize(cls, v):
        """前後空白除去・大文字化"""
        return normalize_code(v)

    @field_validator("airline", "return_date", mode="before")
    @classmethod
    def empty_as_none(cls, v):
        return blank_to_none(v)
