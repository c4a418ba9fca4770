import time
from datetime import date
from typing import Callable

from aws_lambda_powertools import Logger

from skywings.offer.domain.entity import FlightOffer
from skywings.offer.domain.enum import TravelClass
from skywings.offer.domain.gateway import FlightOfferProvider
from skywings.offer.domain.repository import RECENT_OFFERS_KEY, OfferCache
from skywings.offer.domain.value_object import IataCode, SearchCriteria
from skywings.shared.domain.exception import (
    NoFlightsFoundException,
    RateLimitedException,
    UpstreamException,
    ValidationException,
)

logger = Logger(child=True)


class SearchFlightsService:
    """フライト検索ユースケース

    外部 API から取得したオファーを検証・絞り込み・価格順に並べ替え、
    全件をオファーキャッシュに保存する。
    """

    def __init__(
        self,
        provider: FlightOfferProvider,
        cache: OfferCache,
        cache_ttl_seconds: int = 3600,
        max_retries: int = 3,
        retry_base_delay_seconds: float = 2.0,
        max_results: int = 20,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._provider = provider
        self._cache = cache
        self._cache_ttl_seconds = cache_ttl_seconds
        self._max_retries = max_retries
        self._retry_base_delay_seconds = retry_base_delay_seconds
        self._max_results = max_results
        self._sleep = sleep

    def search(
        self,
        origin: str,
        destination: str,
        departure_date: date,
        adults: int = 1,
        travel_class: TravelClass = TravelClass.ECONOMY,
        airline: str | None = None,
        direct_only: bool = False,
        return_date: date | None = None,
    ) -> list[FlightOffer]:
        """フライトを検索する

        Raises:
            ValidationException: 空港コードなどの入力が不正
            UpstreamException: 外部 API の失敗（レート制限のリトライ上限到達を含む）
            NoFlightsFoundException: 絞り込みの各段階で結果が0件になった
        """
        criteria = self._to_criteria(
            origin,
            destination,
            departure_date,
            adults,
            travel_class,
            airline,
            direct_only,
            return_date,
        )

        offers = self._fetch_with_retry(criteria)
        if not offers:
            raise NoFlightsFoundException.no_flights()

        # 絞り込み前の全件を保存する（予約時はキャッシュからのみ解決する）
        self._cache.put(RECENT_OFFERS_KEY, offers, self._cache_ttl_seconds)

        if criteria.airline:
            offers = [o for o in offers if o.is_operated_by(criteria.airline)]
            if not offers:
                raise NoFlightsFoundException.for_airline(criteria.airline)

        offers = [o for o in offers if o.arrives_at(criteria.destination)]
        if not offers:
            raise NoFlightsFoundException.to_destination(str(criteria.destination))

        # sorted は安定ソートのため、同額の場合は API の並び順を保持する
        return sorted(offers, key=lambda offer: offer.price.amount)

    def _to_criteria(
        self,
        origin: str,
        destination: str,
        departure_date: date,
        adults: int,
        travel_class: TravelClass,
        airline: str | None,
        direct_only: bool,
        return_date: date | None,
    ) -> SearchCriteria:
        origin_code = self._to_iata_code(origin, "origin")
        destination_code = self._to_iata_code(destination, "destination")
        try:
            return SearchCriteria(
                origin=origin_code,
                destination=destination_code,
                departure_date=departure_date,
                adults=adults,
                travel_class=travel_class,
                airline=airline.strip().upper() if airline and airline.strip() else None,
                direct_only=direct_only,
                return_date=return_date,
                max_results=self._max_results,
            )
        except ValueError as e:
            raise ValidationException(str(e)) from e

    @staticmethod
    def _to_iata_code(value: str, field: str) -> IataCode:
        try:
            return IataCode(value.strip().upper() if isinstance(value, str) else value)
        except ValueError as e:
            raise ValidationException(str(e), field=field) from e

    def _fetch_with_retry(self, criteria: SearchCriteria) -> list[FlightOffer]:
        """レート制限時のみ指数バックオフでリトライする"""
        delay = self._retry_base_delay_seconds
        for attempt in range(1, self._max_retries + 1):
            try:
                return self._provider.search(criteria)
            except RateLimitedException as e:
                if attempt == self._max_retries:
                    raise UpstreamException("Max retries reached") from e
                logger.warning(
                    "Rate limit hit, retrying",
                    extra={"attempt": attempt, "delay_seconds": delay},
                )
                self._sleep(delay)
                delay *= 2
        raise UpstreamException("Max retries reached")
