from .travel_class import TravelClass as TravelClass
