from abc import ABC, abstractmethod

from skywings.offer.domain.entity import FlightOffer

# 単一テナント前提の共有キー（直近の検索結果）
RECENT_OFFERS_KEY = "recent-offers"


class OfferCache(ABC):
    """フライトオファーの短期キャッシュ

    - キー単位で丸ごと上書きする（マージしない）
    - 期限切れはキャッシュミスと同じ扱い。呼び出し側はエラーとしてリトライしない
    """

    @abstractmethod
    def put(self, key: str, offers: list[FlightOffer], ttl_seconds: int) -> None:
        """オファー一覧を有効期限付きで保存する"""
        raise NotImplementedError

    @abstractmethod
    def get(self, key: str) -> list[FlightOffer] | None:
        """有効なオファー一覧を返す。存在しない・期限切れの場合は None"""
        raise NotImplementedError

    def find_offer(
        self, offer_id: str, key: str = RECENT_OFFERS_KEY
    ) -> FlightOffer | None:
        """キャッシュ済みのオファーを ID で検索する"""
        for offer in self.get(key) or []:
            if offer.id == offer_id:
                return offer
        return None
