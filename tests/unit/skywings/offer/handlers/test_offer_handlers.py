import json

import pytest

from skywings.offer.domain.repository import RECENT_OFFERS_KEY
from skywings.offer.handlers import get_offer, search_flights
from skywings.shared.config import Settings
from skywings.shared.domain.exception import RateLimitedException, UpstreamException


def api_event(query: dict | None = None, path_parameters: dict | None = None) -> dict:
    return {
        "httpMethod": "GET",
        "path": "/flights",
        "headers": {},
        "queryStringParameters": query,
        "pathParameters": path_parameters,
        "body": None,
        "requestContext": {"requestId": "test-request"},
    }


SEARCH_QUERY = {"from": "jfk", "to": "lax", "date": "2025-06-01"}


@pytest.fixture(autouse=True)
def use_app_context(monkeypatch, app_context):
    monkeypatch.setattr(search_flights, "get_context", lambda: app_context)
    monkeypatch.setattr(get_offer, "get_context", lambda: app_context)
    return app_context


class TestSearchFlightsHandler:
    """フライト検索ハンドラのテスト"""

    def test_returns_offers_sorted_by_price(
        self, app_context, create_offer, lambda_context
    ):
        # Arrange
        app_context.offer_provider.search.return_value = [
            create_offer(offer_id="1", price="300.00"),
            create_offer(offer_id="2", price="120.00"),
        ]

        # Act
        response = search_flights.lambda_handler(api_event(SEARCH_QUERY), lambda_context)

        # Assert
        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert [o["id"] for o in body["offers"]] == ["2", "1"]
        assert body["offers"][0]["stops"] == 0
        assert body["message"] is None
        criteria = app_context.offer_provider.search.call_args[0][0]
        assert str(criteria.origin) == "JFK"
        assert app_context.offer_cache.find_offer("1") is not None

    def test_no_flights_returns_empty_result_with_reason(
        self, app_context, lambda_context
    ):
        app_context.offer_provider.search.return_value = []

        response = search_flights.lambda_handler(api_event(SEARCH_QUERY), lambda_context)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["offers"] == []
        assert body["code"] == "NO_FLIGHTS"
        assert body["message"]

    def test_invalid_airport_code(self, app_context, lambda_context):
        response = search_flights.lambda_handler(
            api_event({**SEARCH_QUERY, "from": "JF"}), lambda_context
        )

        assert response["statusCode"] == 400
        assert json.loads(response["body"])["error"]["field"] == "origin"
        app_context.offer_provider.search.assert_not_called()

    def test_missing_date(self, lambda_context):
        response = search_flights.lambda_handler(
            api_event({"from": "JFK", "to": "LAX"}), lambda_context
        )

        assert response["statusCode"] == 400

    def test_upstream_failure_hides_details(self, app_context, lambda_context):
        app_context.offer_provider.search.side_effect = UpstreamException(
            "Flight provider responded with HTTP 500"
        )

        response = search_flights.lambda_handler(api_event(SEARCH_QUERY), lambda_context)

        assert response["statusCode"] == 502
        error = json.loads(response["body"])["error"]
        assert error["message"] == "Failed to fetch flights"
        assert "HTTP 500" not in response["body"]

    def test_rate_limit_is_retried(self, app_context, lambda_context):
        app_context.settings = Settings(
            booking_store="memory", search_retry_base_delay_seconds=0.0
        )
        app_context.offer_provider.search.side_effect = RateLimitedException("429")

        response = search_flights.lambda_handler(api_event(SEARCH_QUERY), lambda_context)

        assert response["statusCode"] == 502
        assert (
            app_context.offer_provider.search.call_count
            == app_context.settings.search_max_retries
        )


class TestGetOfferHandler:
    """フライト詳細ハンドラのテスト"""

    def test_returns_cached_offer(self, app_context, create_offer, lambda_context):
        app_context.offer_cache.put(
            RECENT_OFFERS_KEY, [create_offer(offer_id="7", via="ORD")], ttl_seconds=60
        )

        response = get_offer.lambda_handler(
            api_event(path_parameters={"offer_id": "7"}), lambda_context
        )

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["id"] == "7"
        assert body["stops"] == 1
        assert len(body["segments"]) == 2

    def test_unknown_offer(self, lambda_context):
        response = get_offer.lambda_handler(
            api_event(path_parameters={"offer_id": "missing"}), lambda_context
        )

        assert response["statusCode"] == 404
        assert json.loads(response["body"])["error"]["code"] == "OFFER_NOT_FOUND"
