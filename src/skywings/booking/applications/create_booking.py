from collections.abc import Callable, Sequence

from aws_lambda_powertools import Logger

from skywings.booking.domain.entity import Booking
from skywings.booking.domain.factory import (
    BookingFactory,
    PassengerDetails,
    PaymentDetails,
)
from skywings.booking.domain.repository import BookingRepository
from skywings.booking.domain.value_object import BookingReference
from skywings.notification.applications import NotificationDispatcher
from skywings.offer.domain.repository import OfferCache
from skywings.shared.domain import IsoDateTime
from skywings.shared.domain.exception import (
    DuplicateResourceException,
    OfferNotFoundException,
    ReferenceGenerationException,
)

logger = Logger(child=True)

# 予約番号の衝突時に再採番する回数
MAX_REFERENCE_ATTEMPTS = 5


class CreateBookingService:
    """フライト予約作成ユースケース

    1. 入力（搭乗者・支払い情報）を検証する
    2. オファーキャッシュからオファーを解決する（期限切れは予約不可）
    3. 予約番号を採番し、未使用であることを確認して保存する
    4. 予約確認を通知する（失敗しても予約は成功）
    """

    def __init__(
        self,
        offer_cache: OfferCache,
        repository: BookingRepository,
        dispatcher: NotificationDispatcher,
        factory: BookingFactory | None = None,
        generate_reference: Callable[[], BookingReference] = BookingReference.generate,
        clock: Callable[[], IsoDateTime] = IsoDateTime.now,
    ) -> None:
        self._offer_cache = offer_cache
        self._repository = repository
        self._dispatcher = dispatcher
        self._factory = factory or BookingFactory()
        self._generate_reference = generate_reference
        self._clock = clock

    def create(
        self,
        offer_id: str,
        passengers: Sequence[PassengerDetails],
        payment: PaymentDetails,
    ) -> Booking:
        """予約を作成する

        Raises:
            ValidationException: 搭乗者・支払い情報の形式が不正
            OfferNotFoundException: オファーがキャッシュに存在しない
            ReferenceGenerationException: 予約番号の採番がリトライ上限に達した
        """
        new_passengers = self._factory.passengers_from(passengers)
        payment_summary = self._factory.payment_from(payment).summary()

        offer = self._offer_cache.find_offer(offer_id)
        if offer is None:
            raise OfferNotFoundException(offer_id)

        for attempt in range(1, MAX_REFERENCE_ATTEMPTS + 1):
            reference = self._generate_reference()
            if self._repository.exists(reference):
                logger.info(
                    "Booking reference collision",
                    extra={"reference": str(reference), "attempt": attempt},
                )
                continue

            booking = self._factory.create(
                reference=reference,
                offer=offer,
                passengers=new_passengers,
                payment=payment_summary,
                created_at=self._clock(),
            )
            booking.confirm()
            try:
                self._repository.insert(booking)
            except DuplicateResourceException:
                logger.info(
                    "Booking reference taken concurrently",
                    extra={"reference": str(reference), "attempt": attempt},
                )
                continue

            logger.info(
                "Booking created",
                extra={
                    "reference": str(booking.reference),
                    "offer_id": offer_id,
                    "passengers": len(booking.passengers),
                    "total_price": str(booking.total_price),
                    "card": payment_summary.masked_card_number,
                },
            )
            self._dispatcher.booking_confirmed(booking)
            return booking

        raise ReferenceGenerationException(
            f"Could not generate a unique booking reference "
            f"after {MAX_REFERENCE_ATTEMPTS} attempts"
        )
