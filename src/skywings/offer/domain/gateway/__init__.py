from .flight_offer_provider import FlightOfferProvider as FlightOfferProvider
