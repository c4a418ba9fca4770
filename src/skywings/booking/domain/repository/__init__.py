from .booking_repository import BOOKING_LIST_LIMIT as BOOKING_LIST_LIMIT
from .booking_repository import PASSENGER_SEARCH_LIMIT as PASSENGER_SEARCH_LIMIT
from .booking_repository import BookingRepository as BookingRepository
