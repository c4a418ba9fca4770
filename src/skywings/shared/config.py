import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """環境変数から読み込むアプリケーション設定"""

    table_name: str | None = None
    booking_store: str = "dynamodb"
    amadeus_client_id: str = ""
    amadeus_client_secret: str = ""
    amadeus_base_url: str = "https://test.api.amadeus.com"
    amadeus_timeout_seconds: float = 15.0
    offer_cache_ttl_seconds: int = 3600
    search_max_retries: int = 3
    search_retry_base_delay_seconds: float = 2.0
    search_max_results: int = 20

    def __post_init__(self) -> None:
        if self.booking_store not in ("dynamodb", "memory"):
            raise ValueError(
                f"BOOKING_STORE must be 'dynamodb' or 'memory': {self.booking_store}"
            )
        if self.booking_store == "dynamodb" and not self.table_name:
            raise ValueError("TABLE_NAME is required when BOOKING_STORE=dynamodb")
        if self.offer_cache_ttl_seconds <= 0:
            raise ValueError("OFFER_CACHE_TTL_SECONDS must be greater than 0")
        if self.search_max_retries <= 0:
            raise ValueError("SEARCH_MAX_RETRIES must be greater than 0")

    @classmethod
    def from_env(cls) -> "Settings":
        """環境変数から設定を生成する"""
        return cls(
            table_name=os.getenv("TABLE_NAME"),
            booking_store=os.getenv("BOOKING_STORE", "dynamodb").lower(),
            amadeus_client_id=os.getenv("AMADEUS_CLIENT_ID", ""),
            amadeus_client_secret=os.getenv("AMADEUS_CLIENT_SECRET", ""),
            amadeus_base_url=os.getenv(
                "AMADEUS_BASE_URL", "https://test.api.amadeus.com"
            ).rstrip("/"),
            amadeus_timeout_seconds=float(os.getenv("AMADEUS_TIMEOUT_SECONDS", "15")),
            offer_cache_ttl_seconds=int(os.getenv("OFFER_CACHE_TTL_SECONDS", "3600")),
            search_max_retries=int(os.getenv("SEARCH_MAX_RETRIES", "3")),
            search_retry_base_delay_seconds=float(
                os.getenv("SEARCH_RETRY_BASE_DELAY_SECONDS", "2.0")
            ),
            search_max_results=int(os.getenv("SEARCH_MAX_RESULTS", "20")),
        )
