from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from skywings.booking.applications.amend_passengers import AmendPassengersService
from skywings.booking.handlers.request_models import (
    AmendPassengersRequest,
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
    """搭乗者変更 Lambda Handler"""
    reference = parse_reference(event.path_parameters)
    request = AmendPassengersRequest.model_validate_json(event.body or "{}")
    logger.info(
        "Received amend passengers request",
        extra={"reference": str(reference), "passengers": len(request.passengers)},
    )

    service = AmendPassengersService(get_context().booking_repository)
    booking = service.amend(reference, [p.to_details() for p in request.passengers])
    return api_response(200, to_booking_data(booking).model_dump())
