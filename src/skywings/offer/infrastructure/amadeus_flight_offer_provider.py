import threading
import time
from typing import Callable

import requests
from aws_lambda_powertools import Logger

from skywings.offer.domain.entity import FlightOffer
from skywings.offer.domain.gateway import FlightOfferProvider
from skywings.offer.domain.value_object import SearchCriteria
from skywings.offer.infrastructure.amadeus_mapper import to_flight_offer
from skywings.shared.domain.exception import (
    BusinessRuleViolationException,
    RateLimitedException,
    UpstreamException,
)

logger = Logger(child=True)

# トークンの有効期限より少し前に更新する
TOKEN_REFRESH_MARGIN_SECONDS = 60


class _AccessToken:
    """OAuth2 client credentials トークンのキャッシュ"""

    def __init__(
        self,
        session: requests.Session,
        base_url: str,
        client_id: str,
        client_secret: str,
        timeout: float,
        clock: Callable[[], float],
    ) -> None:
        self._session = session
        self._url = f"{base_url}/v1/security/oauth2/token"
        self._client_id = client_id
        self._client_secret = client_secret
        self._timeout = timeout
        self._clock = clock
        self._token: str | None = None
        self._expires_at = 0.0
        self._lock = threading.Lock()

    def get(self) -> str:
        with self._lock:
            if self._token and self._clock() < self._expires_at:
                return self._token
            return self._fetch()

    def invalidate(self) -> None:
        with self._lock:
            self._token = None
            self._expires_at = 0.0

    def _fetch(self) -> str:
        try:
            response = self._session.post(
                self._url,
                data={
                    "grant_type": "client_credentials",
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise UpstreamException("Authentication request failed") from e

        if response.status_code == 429:
            raise RateLimitedException("Authentication rate limit exceeded")
        if response.status_code != 200:
            raise UpstreamException(
                f"Authentication failed with HTTP {response.status_code}"
            )

        data = response.json()
        expires_in = int(data.get("expires_in", 1799))
        self._token = data["access_token"]
        self._expires_at = (
            self._clock() + expires_in - TOKEN_REFRESH_MARGIN_SECONDS
        )
        logger.info("Amadeus access token acquired", extra={"expires_in": expires_in})
        return self._token


class AmadeusFlightOfferProvider(FlightOfferProvider):
    """Amadeus Flight Offers Search API を使用した FlightOfferProvider の具象実装

    リトライは行わない。HTTP 429 はトークン取得時も含めて RateLimitedException として呼び出し側に返す。
    """

    SEARCH_PATH = "/v2/shopping/flight-offers"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        base_url: str = "https://test.api.amadeus.com",
        timeout: float = 15.0,
        session: requests.Session | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        self._token = _AccessToken(
            self.session, self.base_url, client_id, client_secret, timeout, clock
        )

    def search(self, criteria: SearchCriteria) -> list[FlightOffer]:
        """フライトオファーを検索し、API の並び順のまま返す

        変換できないオファーは読み飛ばす。すべて変換できなければ UpstreamException。
        """
        data = self._get(self.SEARCH_PATH, self._to_params(criteria))
        raw_offers = data.get("data") or []
        offers = []
        for raw in raw_offers:
            try:
                offers.append(to_flight_offer(raw, criteria.travel_class))
            except (
                KeyError,
                IndexError,
                TypeError,
                ValueError,
                BusinessRuleViolationException,
            ):
                logger.warning(
                    "Skipping malformed flight offer",
                    extra={"offer_id": raw.get("id") if isinstance(raw, dict) else None},
                    exc_info=True,
                )
        if raw_offers and not offers:
            raise UpstreamException("Malformed flight offer response")
        return offers

    def _to_params(self, criteria: SearchCriteria) -> dict:
        params: dict = {
            "originLocationCode": str(criteria.origin),
            "destinationLocationCode": str(criteria.destination),
            "departureDate": criteria.departure_date.isoformat(),
            "adults": criteria.adults,
            "travelClass": criteria.travel_class.value,
            "max": criteria.max_results,
        }
        if criteria.direct_only:
            params["nonStop"] = "true"
        if criteria.return_date is not None:
            params["returnDate"] = criteria.return_date.isoformat()
        return params

    def _get(self, path: str, params: dict) -> dict:
        headers = {"Authorization": f"Bearer {self._token.get()}"}
        try:
            response = self.session.get(
                f"{self.base_url}{path}",
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise UpstreamException("Flight provider timed out") from e
        except requests.RequestException as e:
            raise UpstreamException("Flight provider request failed") from e

        if response.status_code == 429:
            raise RateLimitedException("Flight provider rate limit exceeded")
        if response.status_code == 401:
            self._token.invalidate()
        if response.status_code != 200:
            logger.warning(
                "Flight provider returned an error",
                extra={"status_code": response.status_code, "path": path},
            )
            raise UpstreamException(
                f"Flight provider responded with HTTP {response.status_code}"
            )
        return response.json()
