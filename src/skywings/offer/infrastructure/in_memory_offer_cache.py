import threading
import time
from typing import Callable

from skywings.offer.domain.entity import FlightOffer
from skywings.offer.domain.repository import OfferCache


class InMemoryOfferCache(OfferCache):
    """プロセス内メモリを使用した OfferCache の具象実装

    書き込みはキー単位の丸ごと置き換えのみ。
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[tuple[FlightOffer, ...], float]] = {}
        self._lock = threading.Lock()

    def put(self, key: str, offers: list[FlightOffer], ttl_seconds: int) -> None:
        expires_at = self._clock() + ttl_seconds
        with self._lock:
            self._entries[key] = (tuple(offers), expires_at)

    def get(self, key: str) -> list[FlightOffer] | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            offers, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
        return list(offers)
