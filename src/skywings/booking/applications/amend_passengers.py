from collections.abc import Sequence

from aws_lambda_powertools import Logger

from skywings.booking.domain.entity import Booking
from skywings.booking.domain.factory import BookingFactory, PassengerDetails
from skywings.booking.domain.repository import BookingRepository
from skywings.booking.domain.value_object import BookingReference
from skywings.shared.domain.exception import (
    ConflictException,
    OptimisticLockException,
)

logger = Logger(child=True)

MAX_AMEND_ATTEMPTS = 3


class AmendPassengersService:
    """搭乗者変更ユースケース

    搭乗者一覧を丸ごと差し替える。ステータスによる制限はしない。
    同時更新の競合は再読み込みして再試行する（後勝ち）。
    """

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def amend(
        self, reference: BookingReference, passengers: Sequence[PassengerDetails]
    ) -> Booking:
        """搭乗者一覧を差し替える

        Raises:
            ValidationException: 搭乗者の氏名が空など
            BookingNotFoundException: 予約が存在しない
            ConflictException: 競合がリトライ上限まで解消しなかった
        """
        new_passengers = BookingFactory.passengers_from(passengers)

        for attempt in range(1, MAX_AMEND_ATTEMPTS + 1):
            try:
                booking = self._repository.replace_passengers(
                    reference, new_passengers
                )
            except OptimisticLockException:
                logger.info(
                    "Passenger amendment conflict, retrying",
                    extra={"reference": str(reference), "attempt": attempt},
                )
                continue
            logger.info(
                "Passengers amended",
                extra={
                    "reference": str(reference),
                    "passengers": len(booking.passengers),
                    "status": booking.status.value,
                },
            )
            return booking

        raise ConflictException(
            f"Booking was modified concurrently, please retry: {reference}"
        )
