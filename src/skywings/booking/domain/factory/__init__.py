from .booking_factory import BookingFactory as BookingFactory
from .booking_factory import PassengerDetails as PassengerDetails
from .booking_factory import PaymentDetails as PaymentDetails
