from datetime import date
from unittest.mock import MagicMock

import pytest
import requests

from skywings.offer.domain.enum import TravelClass
from skywings.offer.domain.value_object import IataCode, SearchCriteria
from skywings.offer.infrastructure.amadeus_flight_offer_provider import (
    AmadeusFlightOfferProvider,
)
from skywings.shared.domain.exception import RateLimitedException, UpstreamException


def _response(status_code: int, payload: dict | None = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    return response


TOKEN_RESPONSE = {"access_token": "token-1", "expires_in": 1799}


@pytest.fixture
def session():
    session = MagicMock()
    session.headers = {}
    session.post.return_value = _response(200, TOKEN_RESPONSE)
    return session


@pytest.fixture
def criteria():
    return SearchCriteria(
        origin=IataCode("JFK"),
        destination=IataCode("LAX"),
        departure_date=date(2025, 6, 1),
        adults=2,
        travel_class=TravelClass.BUSINESS,
        direct_only=True,
    )


@pytest.fixture
def create_provider(session):
    def _factory(clock=lambda: 1000.0) -> AmadeusFlightOfferProvider:
        return AmadeusFlightOfferProvider(
            client_id="id",
            client_secret="secret",
            base_url="https://test.api.amadeus.com/",
            session=session,
            clock=clock,
        )

    return _factory


class TestAmadeusFlightOfferProvider:
    """AmadeusFlightOfferProvider のテスト"""

    def test_search_sends_query_and_maps_offers(
        self, create_provider, session, criteria, create_raw_offer
    ):
        # Arrange
        session.get.return_value = _response(
            200, {"data": [create_raw_offer(offer_id="1"), create_raw_offer(offer_id="2")]}
        )
        provider = create_provider()

        # Act
        offers = provider.search(criteria)

        # Assert
        assert [o.id for o in offers] == ["1", "2"]
        url = session.get.call_args[0][0]
        kwargs = session.get.call_args[1]
        assert url == "https://test.api.amadeus.com/v2/shopping/flight-offers"
        assert kwargs["params"]["originLocationCode"] == "JFK"
        assert kwargs["params"]["destinationLocationCode"] == "LAX"
        assert kwargs["params"]["departureDate"] == "2025-06-01"
        assert kwargs["params"]["adults"] == 2
        assert kwargs["params"]["travelClass"] == "BUSINESS"
        assert kwargs["params"]["nonStop"] == "true"
        assert "returnDate" not in kwargs["params"]
        assert kwargs["headers"]["Authorization"] == "Bearer token-1"

    def test_token_is_reused_until_expiry(self, create_provider, session, criteria):
        now = [1000.0]
        session.get.return_value = _response(200, {"data": []})
        provider = create_provider(clock=lambda: now[0])

        provider.search(criteria)
        provider.search(criteria)
        assert session.post.call_count == 1

        # 有効期限の60秒前を過ぎたら再取得する
        now[0] += 1799 - 60
        provider.search(criteria)
        assert session.post.call_count == 2

    def test_rate_limit_raises_rate_limited(self, create_provider, session, criteria):
        session.get.return_value = _response(429)

        with pytest.raises(RateLimitedException):
            create_provider().search(criteria)

    def test_server_error_raises_upstream(self, create_provider, session, criteria):
        session.get.return_value = _response(500)

        with pytest.raises(UpstreamException, match="HTTP 500"):
            create_provider().search(criteria)

    def test_unauthorized_invalidates_token(self, create_provider, session, criteria):
        session.get.return_value = _response(401)
        provider = create_provider()

        with pytest.raises(UpstreamException):
            provider.search(criteria)

        session.get.return_value = _response(200, {"data": []})
        provider.search(criteria)
        assert session.post.call_count == 2

    def test_timeout_raises_upstream(self, create_provider, session, criteria):
        session.get.side_effect = requests.Timeout()

        with pytest.raises(UpstreamException, match="timed out"):
            create_provider().search(criteria)

    def test_authentication_failure_raises_upstream(
        self, create_provider, session, criteria
    ):
        session.post.return_value = _response(401)

        with pytest.raises(UpstreamException, match="Authentication failed"):
            create_provider().search(criteria)
        session.get.assert_not_called()

    def test_token_rate_limit_raises_rate_limited(
        self, create_provider, session, criteria
    ):
        session.post.return_value = _response(429)

        with pytest.raises(RateLimitedException):
            create_provider().search(criteria)
        session.get.assert_not_called()

    def test_all_offers_malformed_raises_upstream(
        self, create_provider, session, criteria
    ):
        session.get.return_value = _response(200, {"data": [{"id": "1"}]})

        with pytest.raises(UpstreamException, match="Malformed"):
            create_provider().search(criteria)

    def test_malformed_offer_is_skipped(
        self, create_provider, session, criteria, create_raw_offer
    ):
        """変換できないオファーだけを除き、残りは返す"""
        session.get.return_value = _response(
            200,
            {
                "data": [
                    create_raw_offer(offer_id="1"),
                    {"id": "2"},
                    create_raw_offer(offer_id="3"),
                ]
            },
        )

        offers = create_provider().search(criteria)

        assert [o.id for o in offers] == ["1", "3"]
