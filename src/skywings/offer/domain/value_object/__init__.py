from .flight_number import FlightNumber as FlightNumber
from .iata_code import IataCode as IataCode
from .iso_duration import IsoDuration as IsoDuration
from .search_criteria import SearchCriteria as SearchCriteria
from .segment import Segment as Segment
