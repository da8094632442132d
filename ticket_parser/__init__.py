from .errors import ParsingError, UnknownAirlineError
from .models import Airline, BookingDraft, FlightSegment, JourneyType, Passenger
from .parser import parse

__version__ = "0.1.0"
