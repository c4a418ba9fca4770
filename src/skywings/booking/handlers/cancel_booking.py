from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from skywings.booking.applications.cancel_booking import CancelBookingService
from skywings.booking.handlers.request_models import (
    CancelBookingRequest,
    parse_reference,
)
from skywings.booking.handlers.response_models import to_booking_data
from skywings.context import get_context
from skywings.shared.utils import api_response, handle_api_errors

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
@handle_api_errors
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """予約キャンセル Lambda Handler"""
    reference = parse_reference(event.path_parameters)
    request = CancelBookingRequest.model_validate_json(event.body or "{}")
    logger.info("Received cancel booking request", extra={"reference": str(reference)})

    ctx = get_context()
    service = CancelBookingService(
        repository=ctx.booking_repository, dispatcher=ctx.dispatcher
    )
    booking = service.cancel(reference, request.reason)
    return api_response(200, to_booking_data(booking).model_dump())
