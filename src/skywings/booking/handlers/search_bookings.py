from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from skywings.booking.applications.list_bookings import ListBookingsService
from skywings.booking.handlers.request_models import SearchBookingsQuery
from skywings.booking.handlers.response_models import to_booking_list
from skywings.context import get_context
from skywings.shared.utils import api_response, handle_api_errors

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
@handle_api_errors
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """搭乗者による予約検索 Lambda Handler（管理者向け）"""
    query = SearchBookingsQuery.model_validate(event.query_string_parameters or {})
    logger.info("Searching bookings by passenger")

    bookings = ListBookingsService(get_context().booking_repository).search(
        email=query.email, last_name=query.last_name, phone=query.phone
    )
    return api_response(200, to_booking_list(bookings))
