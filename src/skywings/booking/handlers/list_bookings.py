from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from skywings.booking.applications.list_bookings import ListBookingsService
from skywings.booking.handlers.request_models import ListBookingsQuery
from skywings.booking.handlers.response_models import to_booking_list
from skywings.context import get_context
from skywings.shared.utils import api_response, handle_api_errors

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
@handle_api_errors
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """予約一覧取得 Lambda Handler（管理者向け）"""
    query = ListBookingsQuery.model_validate(event.query_string_parameters or {})
    logger.info(
        "Listing bookings", extra={"filter": query.model_dump(exclude_none=True)}
    )

    bookings = ListBookingsService(get_context().booking_repository).list(
        query.to_filter()
    )
    return api_response(200, to_booking_list(bookings))
