from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from skywings.booking.applications.seed_sample_bookings import (
    SeedSampleBookingsService,
)
from skywings.context import get_context

logger = Logger()


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """サンプル予約投入 Lambda Handler（直接 Invoke 用）"""
    seeded = SeedSampleBookingsService(get_context().booking_repository).seed()
    return {
        "status": "success",
        "seeded": [str(booking.reference) for booking in seeded],
    }
