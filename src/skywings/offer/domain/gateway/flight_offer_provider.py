from abc import ABC, abstractmethod

from skywings.offer.domain.entity import FlightOffer
from skywings.offer.domain.value_object import SearchCriteria


class FlightOfferProvider(ABC):
    """外部フライトオファー API のインターフェース

    - レート制限時は RateLimitedException を送出する
    - それ以外の通信・応答エラーは UpstreamException を送出する
    - 返却順は API の並び順を保持する
    """

    @abstractmethod
    def search(self, criteria: SearchCriteria) -> list[FlightOffer]:
        """検索条件に合うオファーを取得し、正規化して返す"""
        raise NotImplementedError
