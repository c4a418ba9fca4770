import json
import time
from typing import Callable

import boto3

from skywings.offer.domain.entity import FlightOffer
from skywings.offer.domain.repository import OfferCache
from skywings.offer.infrastructure.offer_codec import offer_from_dict, offer_to_dict


class DynamoDBOfferCache(OfferCache):
    """DynamoDB を使用した OfferCache の具象実装

    expires_at は DynamoDB TTL 属性。TTL による削除は遅延するため、読み出し時にも
    期限を確認する。
    """

    def __init__(
        self,
        table_name: str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.table_name = table_name
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)
        self._clock = clock

    def put(self, key: str, offers: list[FlightOffer], ttl_seconds: int) -> None:
        """オファー一覧を丸ごと上書き保存する"""
        self.table.put_item(
            Item={
                "PK": f"OFFERS#{key}",
                "SK": "OFFERS",
                "entity_type": "OFFER_CACHE",
                "offers": json.dumps([offer_to_dict(offer) for offer in offers]),
                "expires_at": int(self._clock()) + ttl_seconds,
            }
        )

    def get(self, key: str) -> list[FlightOffer] | None:
        response = self.table.get_item(
            Key={"PK": f"OFFERS#{key}", "SK": "OFFERS"},
            ConsistentRead=True,
        )
        item = response.get("Item")
        if not item:
            return None
        if int(item["expires_at"]) <= int(self._clock()):
            return None
        return [offer_from_dict(data) for data in json.loads(item["offers"])]
