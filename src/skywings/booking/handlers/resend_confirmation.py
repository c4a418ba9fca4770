from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from skywings.booking.applications.resend_confirmation import (
    ResendConfirmationService,
)
from skywings.booking.handlers.request_models import parse_reference
from skywings.booking.handlers.response_models import ResendConfirmationResponse
from skywings.context import get_context
from skywings.shared.utils import api_response, handle_api_errors

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
@handle_api_errors
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """予約確認メール再送 Lambda Handler"""
    reference = parse_reference(event.path_parameters)
    logger.info("Resending confirmation", extra={"reference": str(reference)})

    ctx = get_context()
    service = ResendConfirmationService(
        repository=ctx.booking_repository, dispatcher=ctx.dispatcher
    )
    sent_to = service.resend(reference)
    return api_response(200, ResendConfirmationResponse(sent_to=sent_to).model_dump())
