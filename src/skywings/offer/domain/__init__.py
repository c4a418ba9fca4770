from .entity import FlightOffer as FlightOffer
from .enum import TravelClass as TravelClass
from .gateway import FlightOfferProvider as FlightOfferProvider
from .repository import RECENT_OFFERS_KEY as RECENT_OFFERS_KEY
from .repository import OfferCache as OfferCache
from .value_object import FlightNumber as FlightNumber
from .value_object import IataCode as IataCode
from .value_object import IsoDuration as IsoDuration
from .value_object import SearchCriteria as SearchCriteria
from .value_object import Segment as Segment
