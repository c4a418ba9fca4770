from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from skywings.booking.applications.create_booking import CreateBookingService
from skywings.booking.handlers.request_models import CreateBookingRequest
from skywings.booking.handlers.response_models import (
    CreateBookingResponse,
    to_booking_data,
)
from skywings.context import get_context
from skywings.shared.utils import api_response, handle_api_errors

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
@handle_api_errors
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """フライト予約作成 Lambda Handler"""
    request = CreateBookingRequest.model_validate_json(event.body or "{}")
    logger.info(
        "Received create booking request",
        extra={"offer_id": request.offer_id, "passengers": len(request.passengers)},
    )

    ctx = get_context()
    service = CreateBookingService(
        offer_cache=ctx.offer_cache,
        repository=ctx.booking_repository,
        dispatcher=ctx.dispatcher,
    )
    booking = service.create(
        offer_id=request.offer_id,
        passengers=[p.to_details() for p in request.passengers],
        payment=request.payment.to_details(),
    )

    body = CreateBookingResponse(
        booking_reference=str(booking.reference),
        booking=to_booking_data(booking),
    )
    return api_response(201, body.model_dump())
