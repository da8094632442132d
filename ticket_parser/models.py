from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List

from .reference import GROUP_SEAT_THRESHOLD

class Airline(str, Enum):
    JEJU = "7C"
    CEBU = "5J"
    JIN = "LJ"
    BUSAN = "BX"

class JourneyType(str, Enum):
    ONE_WAY = "one-way"
    ROUND_TRIP = "round-trip"
    MULTI_CITY = "multi-city"

@dataclass
class Passenger:
    last_name: str
    first_name: str
    gender: str = ""            # Mr / Ms / Mrs / Miss / ""
    passenger_type: str = ""    # Adult / Child / Infant; "" until a source says so
    ticket_number: str = ""

    @property
    def key(self):
        return (self.last_name, self.first_name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lastName": self.last_name,
            "firstName": self.first_name,
            "gender": self.gender,
            "passengerType": self.passenger_type,
            "ticketNumber": self.ticket_number,
        }

@dataclass
class FlightSegment:
    """One leg. Dates are canonical ``DD MON YYYY``, times ``HH:MM``."""
    flight_number: str
    departure_airport_code: str = ""
    departure_airport_name: str = ""
    departure_date: str = ""
    departure_time: str = ""
    departure_terminal: str = ""
    arrival_airport_code: str = ""
    arrival_airport_name: str = ""
    arrival_date: str = ""
    arrival_time: str = ""
    arrival_terminal: str = ""
    booking_class: str = ""
    baggage_allowance: str = ""
    not_valid_before: str = ""
    not_valid_after: str = ""
    flight_time: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "flightNumber": self.flight_number,
            "departureAirportCode": self.departure_airport_code,
            "departureAirportName": self.departure_airport_name,
            "departureDate": self.departure_date,
            "departureTime": self.departure_time,
            "departureTerminal": self.departure_terminal,
            "arrivalAirportCode": self.arrival_airport_code,
            "arrivalAirportName": self.arrival_airport_name,
            "arrivalDate": self.arrival_date,
            "arrivalTime": self.arrival_time,
            "arrivalTerminal": self.arrival_terminal,
            "bookingClass": self.booking_class,
            "baggageAllowance": self.baggage_allowance,
            "notValidBefore": self.not_valid_before,
            "notValidAfter": self.not_valid_after,
            "flightTime": self.flight_time,
        }

@dataclass(frozen=True)
class Metadata:
    reservation_number: str = ""
    booking_date: str = ""
    total_seats: int = 0        # 0: not printed on the document
    group_name: str = ""

    @property
    def is_group(self) -> bool:
        # a printed group name wins over the seat threshold
        if self.group_name:
            return True
        return self.total_seats >= GROUP_SEAT_THRESHOLD

    def with_seats(self, seats: int) -> "Metadata":
        return replace(self, total_seats=seats)

@dataclass
class BookingDraft:
    """Assembled, not-yet-persisted result of one parse."""
    airline_code: str
    journey_type: JourneyType
    is_group_booking: bool = False
    total_seats: int = 0
    reservation_number: str = ""
    booking_date: str = ""
    journeys: List[FlightSegment] = field(default_factory=list)
    passengers: List[Passenger] = field(default_factory=list)
    needs_passenger_input: bool = False
    group_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "airlineCode": self.airline_code,
            "journeyType": JourneyType(self.journey_type).value,
            "isGroupBooking": self.is_group_booking,
            "totalSeats": self.total_seats,
            "reservationNumber": self.reservation_number,
            "bookingDate": self.booking_date,
            "groupName": self.group_name,
            "journeys": [j.to_dict() for j in self.journeys],
            "passengers": [p.to_dict() for p in self.passengers],
            "needsPassengerInput": self.needs_passenger_input,
        }
