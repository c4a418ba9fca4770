from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from skywings.context import get_context
from skywings.offer.applications.get_flight_offer import GetFlightOfferService
from skywings.offer.handlers.response_models import to_offer_data
from skywings.shared.domain.exception import ValidationException
from skywings.shared.utils import api_response, handle_api_errors

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
@handle_api_errors
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """フライト詳細取得 Lambda Handler"""
    offer_id = (event.path_parameters or {}).get("offer_id")
    if not offer_id:
        raise ValidationException("offer_id is required", field="offer_id")

    logger.info("Fetching flight offer", extra={"offer_id": offer_id})
    offer = GetFlightOfferService(get_context().offer_cache).get(offer_id)
    return api_response(200, to_offer_data(offer).model_dump())
