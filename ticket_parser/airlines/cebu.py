"""
Cebu Pacific (5J) itinerary PDFs, English or Korean.

Each leg is summarised on one line, "ICN – CEB 03 Jan 2026 · 09:35 PM - 01:25 AM".
Passengers are printed title first with the given names before the family
name ("MR. DONG HYEON YOO"), and a fare-type keyword further down.
"""
import logging
from typing import List, NamedTuple
import regex as re

from ..dates import DateFormat, TimeFormat, roll_arrival, to_24h, to_canonical
from ..errors import ParsingError
from ..extractors import (
    add_unique, extract_baggage, first_match, journey_type_for, make_passenger,
    rule, split_name, type_from_keyword,
)
from ..models import Airline, FlightSegment, JourneyType, Metadata, Passenger
from ..reference import airport_name, is_known_airport, terminals

logger = logging.getLogger(__name__)

def _has_letter(s: str) -> bool:
    return any(c.isalpha() for c in s)

def _is_long_date(s: str) -> bool:
    return bool(to_canonical(s, DateFormat.LONG))

def _not_terminal(s: str) -> bool:
    return not re.search(r"터미널|(?i:Terminal)", s)

RESERVATION_RULES = [
    rule(r"(?i:BOOKING\s+REFERENCE(?:\s+NO\.?)?)[:\s]*([A-Z0-9]{6})\b", validate=_has_letter),
    rule(r"예약번호[:\s]*([A-Z0-9]{6})\b", validate=_has_letter),
]
BOOKING_DATE_RULES = [
    rule(r"(?i:BOOKING\s+DATE)[:\s]+([A-Za-z]+\.?\s+\d{1,2},?\s+\d{4})", validate=_is_long_date),
    rule(r"예약날짜[:\s]+([A-Za-z]+\.?\s+\d{1,2},?\s+\d{4})", validate=_is_long_date),
]
CLASS_RULES = [
    rule(r"\b(GO\s?(?:Basic|Easy|Flexi))\b", flags=re.I),
    rule(r"(?i:Fare\s*(?:Type|Bundle))[:\s]+([A-Za-z][A-Za-z ]+?)(?=\s*\n|\s{2,}|$)", validate=_not_terminal),
]

_ARROW = r"\s*[–—→-]\s*"
LEG_RE = re.compile(
    rf"\b([A-Z]{{3}}){_ARROW}([A-Z]{{3}})\s+(\d{{1,2}}\s+[A-Za-z]{{3,9}}\s+\d{{4}})\s*[·•∙]?\s*"
    r"(\d{1,2}:\d{2}\s*(?i:[AP]M))\s*[-–]\s*(\d{1,2}:\d{2}\s*(?i:[AP]M))"
)
PAIR_RE = re.compile(rf"\b([A-Z]{{3}}){_ARROW}([A-Z]{{3}})\b")
FLIGHT_RE = re.compile(r"\b5J\s?(\d{2,4})\b")

_TITLE = r"(MSTR|MISS|MRS|MR|MS)"
_NAME_TOKEN = r"(?!(?:ADULT|CHILD|INFANT)\b)[A-Z]+\b"
_FARE = r"(성인|어린이|유아|(?i:Adult|Child|Infant))"
# the fare keyword must come before the next title, at most 500 chars on
PRIMARY_PASSENGER_RE = re.compile(
    rf"\b{_TITLE}\.[ \t]+({_NAME_TOKEN}(?:[ \t]+{_NAME_TOKEN})+)"
    r"(?:(?!\b(?:MSTR|MISS|MRS|MR|MS)\.)[\s\S]){0,500}?"
    + _FARE
)
LOOSE_PASSENGER_RE = re.compile(
    rf"이름\s+{_TITLE}\.?\s+({_NAME_TOKEN}(?:[ \t]+{_NAME_TOKEN})+?)\s*(성인|어린이|유아)"
)

class _Leg(NamedTuple):
    origin: str
    destination: str
    date: str = ""
    dep_time: str = ""
    arr_time: str = ""
    start: int = 0
    end: int = 0

def _legs(text: str) -> List[_Leg]:
    legs: List[_Leg] = []
    seen = set()
    for m in LEG_RE.finditer(text):
        key = (m.group(1), m.group(2), m.group(3))
        if key in seen:
            continue
        seen.add(key)
        legs.append(_Leg(m.group(1), m.group(2), m.group(3), m.group(4), m.group(5), m.start(), m.end()))
    if legs:
        return legs
    # no summary lines: bare "ICN - CEB" pairs, restricted to airports we know
    for m in PAIR_RE.finditer(text):
        o, d = m.group(1), m.group(2)
        if o == d or not (is_known_airport(o) and is_known_airport(d)) or (o, d) in seen:
            continue
        seen.add((o, d))
        legs.append(_Leg(o, d, start=m.start(), end=m.end()))
    return legs

class CebuPacificAdapter:
    airline = Airline.CEBU
    supports_namelist = False

    def classify(self, text: str) -> JourneyType:
        jt = journey_type_for([(leg.origin, leg.destination) for leg in _legs(text)])
        if jt is None:
            raise ParsingError(self.airline.value, "no route (e.g. ICN – CEB) found")
        return jt

    def extract_metadata(self, text: str) -> Metadata:
        return Metadata(
            reservation_number=first_match(RESERVATION_RULES, text, "cebu.reservation"),
            booking_date=to_canonical(first_match(BOOKING_DATE_RULES, text, "cebu.booking_date"), DateFormat.LONG),
        )

    def extract_journeys(self, text: str) -> List[FlightSegment]:
        legs = _legs(text)
        all_flights: List[str] = list(dict.fromkeys("5J" + n for n in FLIGHT_RE.findall(text)))
        journeys: List[FlightSegment] = []
        used = set()
        for i, leg in enumerate(legs):
            window_end = legs[i + 1].start if i + 1 < len(legs) else min(len(text), leg.end + 400)
            window = text[leg.start:window_end]
            # a number already taken by an earlier leg belongs to that leg
            in_window = ["5J" + m.group(1) for m in FLIGHT_RE.finditer(text, leg.end, window_end)]
            fresh = [f for f in in_window if f not in used]
            if fresh:
                flight_number = fresh[0]
            elif i < len(all_flights) and all_flights[i] not in used:
                flight_number = all_flights[i]
            else:
                logger.warning("Cebu Pacific leg %s-%s without a flight number discarded", leg.origin, leg.destination)
                continue
            used.add(flight_number)

            dep_date = to_canonical(leg.date, DateFormat.SPACED)
            dep_time = to_24h(leg.dep_time, TimeFormat.H12)
            arr_time = to_24h(leg.arr_time, TimeFormat.H12)
            dep_term, arr_term = terminals(leg.origin, leg.destination)
            journeys.append(FlightSegment(
                flight_number=flight_number,
                departure_airport_code=leg.origin,
                departure_airport_name=airport_name(leg.origin),
                departure_date=dep_date,
                departure_time=dep_time,
                departure_terminal=dep_term,
                arrival_airport_code=leg.destination,
                arrival_airport_name=airport_name(leg.destination),
                arrival_date=roll_arrival(dep_date, dep_time, "", arr_time),
                arrival_time=arr_time,
                arrival_terminal=arr_term,
                booking_class=first_match(CLASS_RULES, window, "cebu.class") or first_match(CLASS_RULES, text, "cebu.class"),
                baggage_allowance=extract_baggage(window) or extract_baggage(text),
                not_valid_before=dep_date,
                not_valid_after=dep_date,
            ))
        return journeys

    def extract_passengers(self, text: str, is_group: bool) -> List[Passenger]:
        matches = list(PRIMARY_PASSENGER_RE.finditer(text))
        if not matches:
            logger.debug("cebu: no title + fare-type entries, trying the 이름 layout")
            matches = list(LOOSE_PASSENGER_RE.finditer(text))
        passengers: List[Passenger] = []
        for m in matches:
            names = split_name(m.group(2), last_first=False)
            if not names:
                continue
            add_unique(passengers, make_passenger(
                names[0], names[1], title=m.group(1), passenger_type=type_from_keyword(m.group(3)),
            ))
        return passengers
