"""
Jin Air (LJ) e-tickets, parsed straight from the HTML export.

Every leg starts with a ``<strong>ICN TO CEB</strong>`` header followed by the
DEPARTING / ARRIVING cells; passengers are numbered entries carrying their
ticket number.
"""
import logging
from typing import List, Optional
import regex as re

from ..dates import DateFormat, TimeFormat, canonical_from_parts, roll_arrival, to_24h, to_canonical
from ..errors import ParsingError
from ..extractors import (
    add_unique, first_match, journey_type_for, make_passenger, rule, title_case,
)
from ..models import Airline, FlightSegment, JourneyType, Metadata, Passenger
from ..reference import airport_name, terminals

logger = logging.getLogger(__name__)

_NBSP = r"(?:&nbsp;|\xa0)"

RESERVATION_RULES = [
    rule(r"Reservation Number:\s*</td>\s*<td[^>]*>\s*<strong>\s*([A-Z0-9]{5,8})\s*</strong>", flags=re.I),
    rule(r"(?i:Reservation\s+Number):?(?:\s|&nbsp;|<[^>]+>)*([A-Z0-9]{6})\b"),
]
GROUP_NAME_RULES = [
    rule(r"Group Name:\s*</td>\s*<td[^>]*>([^<]+)</td>", flags=re.I),
]
BOOKING_DATE_RULES = [
    rule(r"(?i:Invoice\s+Date):?(?:\s|&nbsp;|<[^>]+>)*(\d{1,2}-[A-Za-z]{3}-\d{4})"),
    rule(r"(?i:Booking\s+Date|Issue\s+Date):?(?:\s|&nbsp;|<[^>]+>)*(\d{1,2}-[A-Za-z]{3}-\d{4})"),
]

LEG_HEADER_RE = re.compile(r"<strong>\s*([A-Z]{3})\s+TO\s+([A-Z]{3})\s*</strong>")
FLIGHT_RULES = [
    rule(r"Flight No\s+<strong>\s*(LJ\s*\d+)\s*</strong>", flags=re.I),
    rule(r"\b(LJ\s?\d{3,4})\b"),
]
DEPARTING_NAME_RE = re.compile(r"DEPARTING[^<]*</strong><br>\s*<font[^>]*>\s*([^,<]+),?\s*([^<]*)<br>", re.I)
ARRIVING_NAME_RE = re.compile(r"ARRIVING[^<]*</strong><br>\s*<font[^>]*>\s*([^,<]+),?\s*([^<]*)<br>", re.I)
DEPARTING_TERMINAL_RE = re.compile(r"DEPARTING[^<]*</strong><br>[^(]*\(Terminal\s+(\d+)\)", re.I)
ARRIVING_TERMINAL_RE = re.compile(r"ARRIVING[^<]*</strong><br>[^(]*\(Terminal\s+(\d+)\)", re.I)
# 2135hr, Sat, 03 Jan 2026
TIME_DATE_RE = re.compile(r"(\d{4})hr\s*,\s*[A-Za-z]{3},?\s*(\d{1,2})\s+([A-Za-z]{3})\s+(\d{4})", re.I)
HR_RE = re.compile(r"(\d{4})hr", re.I)
DAY_RE = re.compile(r"(\d{1,2})\s+([A-Za-z]{3})\s+(\d{4})")
BAGGAGE_RE = re.compile(r"Baggage\s+allowance\s+(\d+)\s*kg", re.I)
FLIGHT_TIME_RE = re.compile(r"Flight\s+time:\s*(\d{1,2}hr\s+\d{2}mins?)", re.I)
NOT_VALID_BEFORE_RE = re.compile(r"Not valid before:\s*(\d{1,2}\s+[A-Za-z]{3}\s+\d{4})", re.I)
NOT_VALID_AFTER_RE = re.compile(r"Not valid after:\s*(\d{1,2}\s+[A-Za-z]{3}\s+\d{4})", re.I)
FARE_CLASS_RE = re.compile(
    r"<strong>\s*[A-Z]{3}\s+TO\s+[A-Z]{3}\s*</strong>[^<]*</td>\s*<td[^>]*>\s*<strong>\s*([A-Z]+)", re.I
)

# "1. BANDOY, ROEL JR&nbsp;MR&nbsp;...[Ticket Number:&nbsp;7182382992079]"
PASSENGER_RE = re.compile(
    r"(\d+)\.\s+([A-Z]+(?: [A-Z]+)*),\s+([A-Za-z ]+?)\s*" + _NBSP + r"+\s*(MSTR|MISS|MRS|MR|MS)\s*" + _NBSP
    + r"[^\[]*?\[\s*Ticket Number:\s*" + _NBSP + r"*\s*(\d+)\s*\]",
    re.S,
)

_AIRPORT_NOISE_RE = re.compile(r"International Airport|Airport|Mactan", re.I)

def _clean_airport_name(name: str) -> str:
    return title_case(_AIRPORT_NOISE_RE.sub("", name or ""))

def _search(rx, text: str, group: int = 1) -> str:
    m = rx.search(text)
    return m.group(group).strip() if m else ""

def _legs(html: str):
    return list(LEG_HEADER_RE.finditer(html))

def _parse_leg(html: str, start: int, end: int) -> Optional[FlightSegment]:
    section = html[start:end]
    flight_number = first_match(FLIGHT_RULES, section, "jin.flight").replace(" ", "")
    if not flight_number:
        logger.warning("Jin Air leg at offset %d without a flight number discarded", start)
        return None

    header = LEG_HEADER_RE.match(html, start)
    dep_code = header.group(1) if header else ""
    arr_code = header.group(2) if header else ""

    dep_date = dep_time = ""
    m = TIME_DATE_RE.search(section)
    if m:
        dep_time = to_24h(m.group(1), TimeFormat.COMPACT)
        dep_date = canonical_from_parts(m.group(2), m.group(3), m.group(4))

    arr_date = arr_time = ""
    arriving = section.upper().find("ARRIVING")
    if arriving != -1:
        after = section[arriving:]
        hm = HR_RE.search(after)
        if hm:
            arr_time = to_24h(hm.group(1), TimeFormat.COMPACT)
            dm = DAY_RE.search(after, hm.end())
            if dm:
                arr_date = canonical_from_parts(dm.group(1), dm.group(2), dm.group(3))
    arr_date = roll_arrival(dep_date, dep_time, arr_date, arr_time)

    table_dep, table_arr = terminals(dep_code, arr_code)
    baggage = _search(BAGGAGE_RE, section)

    # the fare cell sits in the header row, just around the leg start
    fare_window = html[max(0, start - 200):start + 500]
    return FlightSegment(
        flight_number=flight_number,
        departure_airport_code=dep_code,
        departure_airport_name=_clean_airport_name(_search(DEPARTING_NAME_RE, section)) or airport_name(dep_code),
        departure_date=dep_date,
        departure_time=dep_time,
        departure_terminal=_search(DEPARTING_TERMINAL_RE, section) or table_dep,
        arrival_airport_code=arr_code,
        arrival_airport_name=_clean_airport_name(_search(ARRIVING_NAME_RE, section)) or airport_name(arr_code),
        arrival_date=arr_date,
        arrival_time=arr_time,
        arrival_terminal=_search(ARRIVING_TERMINAL_RE, section) or table_arr,
        booking_class=_search(FARE_CLASS_RE, fare_window),
        baggage_allowance=f"{int(baggage)}kg" if baggage else "",
        not_valid_before=to_canonical(_search(NOT_VALID_BEFORE_RE, section), DateFormat.SPACED) or dep_date,
        not_valid_after=to_canonical(_search(NOT_VALID_AFTER_RE, section), DateFormat.SPACED) or dep_date,
        flight_time=_search(FLIGHT_TIME_RE, section),
    )

class JinAirAdapter:
    airline = Airline.JIN
    supports_namelist = False

    def classify(self, text: str) -> JourneyType:
        jt = journey_type_for([(m.group(1), m.group(2)) for m in _legs(text)])
        if jt is None:
            raise ParsingError(self.airline.value, "no 'XXX TO YYY' leg header found")
        return jt

    def extract_metadata(self, text: str) -> Metadata:
        return Metadata(
            reservation_number=first_match(RESERVATION_RULES, text, "jin.reservation"),
            booking_date=to_canonical(first_match(BOOKING_DATE_RULES, text, "jin.booking_date"), DateFormat.HYPHEN),
            group_name=first_match(GROUP_NAME_RULES, text, "jin.group_name"),
        )

    def extract_journeys(self, text: str) -> List[FlightSegment]:
        legs = _legs(text)
        journeys: List[FlightSegment] = []
        seen = set()
        for i, m in enumerate(legs):
            end = min(m.start() + 3000, legs[i + 1].start() if i + 1 < len(legs) else len(text))
            seg = _parse_leg(text, m.start(), end)
            if seg is None:
                continue
            key = (seg.flight_number, seg.departure_date)
            if key in seen:
                continue
            seen.add(key)
            journeys.append(seg)
        return journeys

    def extract_passengers(self, text: str, is_group: bool) -> List[Passenger]:
        passengers: List[Passenger] = []
        for m in PASSENGER_RE.finditer(text):
            add_unique(passengers, make_passenger(
                m.group(2), m.group(3), title=m.group(4), passenger_type="Adult", ticket_number=m.group(5),
            ))
        return passengers
