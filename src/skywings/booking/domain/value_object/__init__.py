from .booking_filter import BookingFilter as BookingFilter
from .booking_filter import PassengerQuery as PassengerQuery
from .booking_reference import BookingReference as BookingReference
from .flight_snapshot import FlightSnapshot as FlightSnapshot
from .passenger import Passenger as Passenger
from .payment import PaymentIntent as PaymentIntent
from .payment import PaymentSummary as PaymentSummary
