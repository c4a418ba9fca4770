from __future__ import annotations

from collections.abc import Iterable, Sequence

import boto3
from aws_lambda_powertools import Logger
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from skywings.booking.domain.entity import Booking
from skywings.booking.domain.enum import BookingStatus
from skywings.booking.domain.repository import (
    BOOKING_LIST_LIMIT,
    PASSENGER_SEARCH_LIMIT,
    BookingRepository,
)
from skywings.booking.domain.value_object import (
    BookingFilter,
    BookingReference,
    Passenger,
    PassengerQuery,
)
from skywings.booking.infrastructure.booking_codec import (
    booking_from_dict,
    booking_to_dict,
)
from skywings.shared.domain import IsoDateTime
from skywings.shared.domain.exception import (
    AlreadyCancelledException,
    BookingNotFoundException,
    DuplicateResourceException,
    OptimisticLockException,
)

logger = Logger(child=True)

# BatchGetItem の1リクエストあたりの上限
BATCH_GET_LIMIT = 100


class DynamoDBBookingRepository(BookingRepository):
    """DynamoDBを使用した BookingRepository の具象実装

    シングルテーブル設計:
    - 予約本体: PK=BOOKING#<ref>, SK=BOOKING
      - GSI1: GSI1PK=BOOKINGS, GSI1SK=<created_at>#<ref>（作成日時順の一覧）
      - GSI2: GSI2PK=DEPARTURE#<date>, GSI2SK=<created_at>#<ref>（出発日検索）
    - 搭乗者索引: PK=EMAIL#<email> / LASTNAME#<last_name> / PHONE#<phone>, SK=BOOKING#<ref>
      予約本体と同一トランザクションで書き込む。
    """

    def __init__(self, table_name: str) -> None:
        self.table_name = table_name
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)
        self.client = self.table.meta.client

    def insert(self, booking: Booking) -> None:
        """予約本体と搭乗者索引をトランザクションで保存する"""
        transact_items = [
            {
                "Put": {
                    "TableName": self.table_name,
                    "Item": self._to_item(booking),
                    "ConditionExpression": "attribute_not_exists(PK)",
                }
            }
        ]
        transact_items.extend(
            {"Put": {"TableName": self.table_name, "Item": item}}
            for item in self._lookup_items(booking.reference, booking.passengers)
        )
        try:
            self.client.transact_write_items(TransactItems=transact_items)
        except ClientError as e:
            if self._is_condition_failure(e, index=0):
                raise DuplicateResourceException(
                    f"Booking already exists: {booking.reference}"
                ) from e
            raise

    def find_by_id(self, reference: BookingReference) -> Booking | None:
        """予約番号で検索"""
        item = self._get_item(reference)
        if not item:
            return None
        return self._to_entity(item)

    def exists(self, reference: BookingReference) -> bool:
        response = self.table.get_item(
            Key=self._key(reference),
            ProjectionExpression="PK",
            ConsistentRead=True,
        )
        return "Item" in response

    def is_empty(self) -> bool:
        response = self.table.query(
            IndexName="GSI1",
            KeyConditionExpression=Key("GSI1PK").eq("BOOKINGS"),
            Limit=1,
        )
        return not response.get("Items")

    def list(
        self, booking_filter: BookingFilter, limit: int = BOOKING_LIST_LIMIT
    ) -> list[Booking]:
        """絞り込み条件に応じてインデックスを選び、残りの条件はメモリ上で判定する"""
        if booking_filter.email is not None:
            items = self._fetch_by_lookup([f"EMAIL#{booking_filter.email}"])
        elif booking_filter.last_name is not None:
            items = self._fetch_by_lookup([f"LASTNAME#{booking_filter.last_name}"])
        elif booking_filter.departure_date is not None:
            items = self._query_all(
                IndexName="GSI2",
                KeyConditionExpression=Key("GSI2PK").eq(
                    f"DEPARTURE#{booking_filter.departure_date.isoformat()}"
                ),
                ScanIndexForward=False,
            )
        else:
            items = self._query_recent(booking_filter, limit)

        bookings = [self._to_entity(item) for item in items]
        return self._newest_first(b for b in bookings if booking_filter.matches(b))[
            :limit
        ]

    def search_by_passenger(
        self, query: PassengerQuery, limit: int = PASSENGER_SEARCH_LIMIT
    ) -> list[Booking]:
        """いずれかの搭乗者索引に一致する予約を返す"""
        lookup_keys = []
        if query.email:
            lookup_keys.append(f"EMAIL#{query.email}")
        if query.last_name:
            lookup_keys.append(f"LASTNAME#{query.last_name}")
        if query.phone:
            lookup_keys.append(f"PHONE#{query.phone}")

        bookings = [self._to_entity(item) for item in self._fetch_by_lookup(lookup_keys)]
        return self._newest_first(b for b in bookings if query.matches(b))[:limit]

    def update_status_to_cancelled(
        self,
        reference: BookingReference,
        reason: str,
        expected_status: BookingStatus,
        cancelled_at: IsoDateTime,
    ) -> Booking:
        """現在のステータスを条件にキャンセル済みへ更新する"""
        try:
            response = self.table.update_item(
                Key=self._key(reference),
                UpdateExpression=(
                    "SET #status = :cancelled, cancelled_at = :cancelled_at, "
                    "cancellation_reason = :reason, #version = #version + :one"
                ),
                ConditionExpression=Attr("PK").exists()
                & Attr("status").eq(expected_status.value),
                ExpressionAttributeNames={"#status": "status", "#version": "version"},
                ExpressionAttributeValues={
                    ":cancelled": BookingStatus.CANCELLED.value,
                    ":cancelled_at": str(cancelled_at),
                    ":reason": reason.strip(),
                    ":one": 1,
                },
                ReturnValues="ALL_NEW",
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise self._classify_cancel_failure(reference, expected_status) from e
            raise
        return self._to_entity(response["Attributes"])

    def replace_passengers(
        self, reference: BookingReference, passengers: Sequence[Passenger]
    ) -> Booking:
        """予約本体をバージョン条件付きで書き換え、搭乗者索引を差し替える"""
        item = self._get_item(reference)
        if not item:
            raise BookingNotFoundException(str(reference))

        booking = self._to_entity(item)
        expected_version = booking.version
        old_keys = {
            lookup["PK"] for lookup in self._lookup_items(reference, booking.passengers)
        }
        booking.replace_passengers(passengers)
        new_items = self._lookup_items(reference, booking.passengers)
        new_keys = {lookup["PK"] for lookup in new_items}

        transact_items: list[dict] = [
            {
                "Put": {
                    "TableName": self.table_name,
                    "Item": self._to_item(booking),
                    "ConditionExpression": "#version = :expected_version",
                    "ExpressionAttributeNames": {"#version": "version"},
                    "ExpressionAttributeValues": {
                        ":expected_version": expected_version
                    },
                }
            }
        ]
        transact_items.extend(
            {
                "Delete": {
                    "TableName": self.table_name,
                    "Key": {"PK": pk, "SK": f"BOOKING#{reference}"},
                }
            }
            for pk in sorted(old_keys - new_keys)
        )
        transact_items.extend(
            {"Put": {"TableName": self.table_name, "Item": lookup}}
            for lookup in new_items
            if lookup["PK"] not in old_keys
        )

        try:
            self.client.transact_write_items(TransactItems=transact_items)
        except ClientError as e:
            if self._is_condition_failure(e, index=0):
                raise OptimisticLockException(
                    f"Booking was modified concurrently: reference={reference}, "
                    f"expected version {expected_version}"
                ) from e
            raise
        return booking

    def _classify_cancel_failure(
        self, reference: BookingReference, expected_status: BookingStatus
    ) -> Exception:
        """条件付き更新の失敗理由を最新の状態から判定する"""
        item = self._get_item(reference)
        if not item:
            return BookingNotFoundException(str(reference))
        logger.info(
            "Conditional cancel failed",
            extra={"reference": str(reference), "status": item["status"]},
        )
        if item["status"] == BookingStatus.CANCELLED.value:
            return AlreadyCancelledException(str(reference))
        return OptimisticLockException(
            f"Booking status conflict: expected {expected_status.value}, "
            f"reference={reference}"
        )

    def _get_item(self, reference: BookingReference) -> dict | None:
        response = self.table.get_item(Key=self._key(reference), ConsistentRead=True)
        return response.get("Item")

    def _query_all(self, **kwargs) -> list[dict]:
        """ページングしながら全件取得する"""
        items: list[dict] = []
        while True:
            response = self.table.query(**kwargs)
            items.extend(response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return items
            kwargs["ExclusiveStartKey"] = last_key

    def _query_recent(self, booking_filter: BookingFilter, limit: int) -> list[dict]:
        """作成日時の降順に、条件に一致するものが limit 件に達するまで読む"""
        kwargs: dict = {
            "IndexName": "GSI1",
            "KeyConditionExpression": Key("GSI1PK").eq("BOOKINGS"),
            "ScanIndexForward": False,
        }
        items: list[dict] = []
        matched = 0
        while matched < limit:
            response = self.table.query(**kwargs)
            for item in response.get("Items", []):
                items.append(item)
                if booking_filter.matches(self._to_entity(item)):
                    matched += 1
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            kwargs["ExclusiveStartKey"] = last_key
        return items

    def _fetch_by_lookup(self, lookup_keys: Iterable[str]) -> list[dict]:
        """搭乗者索引から予約番号を集め、予約本体をまとめて取得する"""
        references: dict[str, None] = {}
        for pk in lookup_keys:
            for lookup in self._query_all(KeyConditionExpression=Key("PK").eq(pk)):
                references[lookup["reference"]] = None
        return self._batch_get(list(references))

    def _batch_get(self, references: list[str]) -> list[dict]:
        items: list[dict] = []
        for start in range(0, len(references), BATCH_GET_LIMIT):
            request: dict = {
                self.table_name: {
                    "Keys": [
                        {"PK": f"BOOKING#{ref}", "SK": "BOOKING"}
                        for ref in references[start : start + BATCH_GET_LIMIT]
                    ],
                    "ConsistentRead": True,
                }
            }
            while request:
                response = self.dynamodb.batch_get_item(RequestItems=request)
                items.extend(response.get("Responses", {}).get(self.table_name, []))
                request = response.get("UnprocessedKeys") or {}
        return items

    @staticmethod
    def _is_condition_failure(error: ClientError, index: int) -> bool:
        """トランザクションの index 番目の条件チェックが失敗したかどうか"""
        if error.response["Error"]["Code"] != "TransactionCanceledException":
            return False
        reasons = error.response.get("CancellationReasons") or []
        return (
            len(reasons) > index
            and reasons[index].get("Code") == "ConditionalCheckFailed"
        )

    @staticmethod
    def _newest_first(bookings: Iterable[Booking]) -> list[Booking]:
        return sorted(bookings, key=lambda b: b.created_at.value, reverse=True)

    @staticmethod
    def _key(reference: BookingReference) -> dict:
        return {"PK": f"BOOKING#{reference}", "SK": "BOOKING"}

    @staticmethod
    def _lookup_items(
        reference: BookingReference, passengers: Iterable[Passenger]
    ) -> list[dict]:
        """搭乗者索引アイテム（重複を除く）"""
        keys: dict[str, None] = {}
        for passenger in passengers:
            if passenger.email:
                keys[f"EMAIL#{passenger.email}"] = None
            keys[f"LASTNAME#{passenger.last_name}"] = None
            if passenger.phone:
                keys[f"PHONE#{passenger.phone}"] = None
        return [
            {
                "PK": pk,
                "SK": f"BOOKING#{reference}",
                "entity_type": "BOOKING_LOOKUP",
                "reference": str(reference),
            }
            for pk in keys
        ]

    def _to_item(self, booking: Booking) -> dict:
        """ドメインエンティティを DynamoDB アイテムに変換する"""
        sort_key = f"{booking.created_at}#{booking.reference}"
        return {
            "PK": f"BOOKING#{booking.reference}",
            "SK": "BOOKING",
            "entity_type": "BOOKING",
            "GSI1PK": "BOOKINGS",
            "GSI1SK": sort_key,
            "GSI2PK": f"DEPARTURE#{booking.flight.departure.date().isoformat()}",
            "GSI2SK": sort_key,
            **booking_to_dict(booking),
        }

    def _to_entity(self, item: dict) -> Booking:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        return booking_from_dict(item)
