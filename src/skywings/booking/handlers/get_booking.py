from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from skywings.booking.applications.get_booking import GetBookingService
from skywings.booking.handlers.request_models import parse_reference
from skywings.booking.handlers.response_models import to_booking_data
from skywings.context import get_context
from skywings.shared.utils import api_response, handle_api_errors

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
@handle_api_errors
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """予約詳細取得 Lambda Handler"""
    reference = parse_reference(event.path_parameters)
    logger.info("Fetching booking", extra={"reference": str(reference)})

    booking = GetBookingService(get_context().booking_repository).get(reference)
    return api_response(200, to_booking_data(booking).model_dump())
