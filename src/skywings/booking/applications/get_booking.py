from skywings.booking.domain.entity import Booking
from skywings.booking.domain.repository import BookingRepository
from skywings.booking.domain.value_object import BookingReference
from skywings.shared.domain.exception import BookingNotFoundException


class GetBookingService:
    """予約取得ユースケース"""

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def get(self, reference: BookingReference) -> Booking:
        booking = self._repository.find_by_id(reference)
        if booking is None:
            raise BookingNotFoundException(str(reference))
        return booking
