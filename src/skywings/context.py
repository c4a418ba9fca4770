from dataclasses import dataclass
from functools import lru_cache

from skywings.booking.domain.repository import BookingRepository
from skywings.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from skywings.booking.infrastructure.in_memory_booking_repository import (
    InMemoryBookingRepository,
)
from skywings.notification.applications import NotificationDispatcher
from skywings.notification.domain import ConfirmationNotifier
from skywings.notification.infrastructure.logging_notifier import (
    LoggingConfirmationNotifier,
)
from skywings.offer.domain.gateway import FlightOfferProvider
from skywings.offer.domain.repository import OfferCache
from skywings.offer.infrastructure.amadeus_flight_offer_provider import (
    AmadeusFlightOfferProvider,
)
from skywings.offer.infrastructure.dynamodb_offer_cache import DynamoDBOfferCache
from skywings.offer.infrastructure.in_memory_offer_cache import InMemoryOfferCache
from skywings.shared.config import Settings


@dataclass
class AppContext:
    """各ユースケースが依存する外部リソースをまとめたもの

    プロセス全体のシングルトンにはせず、明示的に生成して渡す。
    テストではフェイクを詰めて生成する。
    """

    offer_cache: OfferCache
    offer_provider: FlightOfferProvider
    booking_repository: BookingRepository
    notifier: ConfirmationNotifier
    settings: Settings

    @property
    def dispatcher(self) -> NotificationDispatcher:
        return NotificationDispatcher(self.notifier)

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        """設定に応じて DynamoDB またはメモリ上の実装を選ぶ"""
        offer_cache: OfferCache
        booking_repository: BookingRepository
        if settings.booking_store == "memory":
            offer_cache = InMemoryOfferCache()
            booking_repository = InMemoryBookingRepository()
        else:
            offer_cache = DynamoDBOfferCache(settings.table_name)
            booking_repository = DynamoDBBookingRepository(settings.table_name)

        return cls(
            offer_cache=offer_cache,
            offer_provider=AmadeusFlightOfferProvider(
                client_id=settings.amadeus_client_id,
                client_secret=settings.amadeus_client_secret,
                base_url=settings.amadeus_base_url,
                timeout=settings.amadeus_timeout_seconds,
            ),
            booking_repository=booking_repository,
            notifier=LoggingConfirmationNotifier(),
            settings=settings,
        )


@lru_cache(maxsize=1)
def get_context() -> AppContext:
    """Lambda 実行環境ごとに1度だけ生成する"""
    return AppContext.from_settings(Settings.from_env())
