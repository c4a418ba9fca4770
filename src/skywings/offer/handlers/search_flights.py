from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from skywings.context import get_context
from skywings.offer.applications.search_flights import SearchFlightsService
from skywings.offer.handlers.request_models import SearchFlightsRequest
from skywings.offer.handlers.response_models import (
    SearchFlightsResponse,
    to_offer_data,
)
from skywings.shared.domain.exception import NoFlightsFoundException
from skywings.shared.utils import api_response, handle_api_errors

logger = Logger()


def _build_service() -> SearchFlightsService:
    ctx = get_context()
    return SearchFlightsService(
        provider=ctx.offer_provider,
        cache=ctx.offer_cache,
        cache_ttl_seconds=ctx.settings.offer_cache_ttl_seconds,
        max_retries=ctx.settings.search_max_retries,
        retry_base_delay_seconds=ctx.settings.search_retry_base_delay_seconds,
        max_results=ctx.settings.search_max_results,
    )


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
@handle_api_errors
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """フライト検索 Lambda Handler"""
    request = SearchFlightsRequest.model_validate(
        event.query_string_parameters or {}
    )
    logger.info(
        "Searching flights",
        extra={
            "origin": request.origin,
            "destination": request.destination,
            "departure_date": request.departure_date.isoformat(),
        },
    )

    try:
        offers = _build_service().search(
            origin=request.origin,
            destination=request.destination,
            departure_date=request.departure_date,
            adults=request.adults,
            travel_class=request.travel_class,
            airline=request.airline,
            direct_only=request.direct_only,
            return_date=request.return_date,
        )
    except NoFlightsFoundException as e:
        body = SearchFlightsResponse(offers=[], message=e.message, code=e.reason)
        return api_response(200, body.model_dump())

    body = SearchFlightsResponse(offers=[to_offer_data(o) for o in offers])
    return api_response(200, body.model_dump())
