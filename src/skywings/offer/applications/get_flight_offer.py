from skywings.offer.domain.entity import FlightOffer
from skywings.offer.domain.repository import OfferCache
from skywings.shared.domain.exception import OfferNotFoundException


class GetFlightOfferService:
    """フライト詳細取得ユースケース（直近の検索結果からのみ解決する）"""

    def __init__(self, cache: OfferCache) -> None:
        self._cache = cache

    def get(self, offer_id: str) -> FlightOffer:
        offer = self._cache.find_offer(offer_id)
        if offer is None:
            raise OfferNotFoundException(offer_id)
        return offer
