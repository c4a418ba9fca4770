from .entity import Booking as Booking
from .enum import BookingStatus as BookingStatus
from .factory import BookingFactory as BookingFactory
from .factory import PassengerDetails as PassengerDetails
from .factory import PaymentDetails as PaymentDetails
from .repository import BookingRepository as BookingRepository
from .value_object import BookingFilter as BookingFilter
from .value_object import BookingReference as BookingReference
from .value_object import FlightSnapshot as FlightSnapshot
from .value_object import Passenger as Passenger
from .value_object import PassengerQuery as PassengerQuery
from .value_object import PaymentIntent as PaymentIntent
from .value_object import PaymentSummary as PaymentSummary
