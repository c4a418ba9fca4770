import json
from unittest.mock import MagicMock, patch

from skywings.offer.infrastructure.dynamodb_offer_cache import DynamoDBOfferCache
from skywings.offer.infrastructure.in_memory_offer_cache import InMemoryOfferCache
from skywings.offer.infrastructure.offer_codec import offer_from_dict, offer_to_dict


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestInMemoryOfferCache:
    """InMemoryOfferCache のテスト"""

    def test_get_returns_offers_within_ttl(self, create_offer):
        clock = FakeClock()
        cache = InMemoryOfferCache(clock=clock)
        offers = [create_offer(offer_id="1"), create_offer(offer_id="2")]

        cache.put("recent-offers", offers, ttl_seconds=3600)
        clock.now += 3599

        assert cache.get("recent-offers") == offers

    def test_expired_entry_is_a_miss(self, create_offer):
        clock = FakeClock()
        cache = InMemoryOfferCache(clock=clock)
        cache.put("recent-offers", [create_offer()], ttl_seconds=3600)

        clock.now += 3600

        assert cache.get("recent-offers") is None
        assert cache.find_offer("1") is None

    def test_put_replaces_whole_entry(self, create_offer):
        cache = InMemoryOfferCache()
        cache.put("recent-offers", [create_offer(offer_id="1")], ttl_seconds=60)

        cache.put("recent-offers", [create_offer(offer_id="2")], ttl_seconds=60)

        assert cache.find_offer("1") is None
        assert cache.find_offer("2").id == "2"


class TestOfferCodec:
    def test_connecting_offer_survives_serialization(self, create_offer):
        offer = create_offer(via="ORD", validating_airline_codes=("AA", "BA"))

        restored = offer_from_dict(json.loads(json.dumps(offer_to_dict(offer))))

        assert restored == offer


class TestDynamoDBOfferCache:
    """DynamoDBOfferCache のテスト"""

    def _create_cache(self, clock) -> tuple[DynamoDBOfferCache, MagicMock]:
        with patch("boto3.resource") as mock_resource:
            mock_table = MagicMock()
            mock_resource.return_value.Table.return_value = mock_table
            cache = DynamoDBOfferCache("test-table", clock=clock)
        return cache, mock_table

    def test_put_writes_item_with_ttl(self, create_offer):
        cache, mock_table = self._create_cache(FakeClock(1000.0))

        cache.put("recent-offers", [create_offer()], ttl_seconds=3600)

        item = mock_table.put_item.call_args[1]["Item"]
        assert item["PK"] == "OFFERS#recent-offers"
        assert item["SK"] == "OFFERS"
        assert item["expires_at"] == 4600
        assert json.loads(item["offers"])[0]["id"] == "1"

    def test_get_returns_offers(self, create_offer):
        offer = create_offer()
        cache, mock_table = self._create_cache(FakeClock(1000.0))
        mock_table.get_item.return_value = {
            "Item": {"offers": json.dumps([offer_to_dict(offer)]), "expires_at": 4600}
        }

        assert cache.get("recent-offers") == [offer]

    def test_expired_item_is_a_miss_even_before_ttl_deletion(self, create_offer):
        cache, mock_table = self._create_cache(FakeClock(5000.0))
        mock_table.get_item.return_value = {
            "Item": {
                "offers": json.dumps([offer_to_dict(create_offer())]),
                "expires_at": 4600,
            }
        }

        assert cache.get("recent-offers") is None

    def test_missing_item_is_a_miss(self):
        cache, mock_table = self._create_cache(FakeClock())
        mock_table.get_item.return_value = {}

        assert cache.get("recent-offers") is None
