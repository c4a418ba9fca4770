from .flight_offer import FlightOffer as FlightOffer
