import pytest

from skywings.offer.applications.get_flight_offer import GetFlightOfferService
from skywings.offer.domain.repository import RECENT_OFFERS_KEY
from skywings.shared.domain.exception import OfferNotFoundException


class TestGetFlightOfferService:
    """GetFlightOfferService のテスト"""

    def test_returns_cached_offer(self, offer_cache, create_offer):
        offer_cache.put(
            RECENT_OFFERS_KEY,
            [create_offer(offer_id="1"), create_offer(offer_id="2")],
            ttl_seconds=60,
        )

        offer = GetFlightOfferService(offer_cache).get("2")

        assert offer.id == "2"

    def test_unknown_offer(self, offer_cache):
        with pytest.raises(OfferNotFoundException):
            GetFlightOfferService(offer_cache).get("missing")
