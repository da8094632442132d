"""
Jeju Air (7C) e-ticket PDFs.

The itinerary is split into an "Originating Flight / 가는편" block and an
optional "Return Flight / 오는편" block. Individual and group bookings print
the passenger list differently; group bookings state the seat count
("예약석 15 석") and leave gender to the separate namelist PDF.
"""
import logging
from typing import List, Optional
import regex as re

from ..dates import DateFormat, TimeFormat, roll_arrival, to_24h, to_canonical
from ..errors import ParsingError
from ..extractors import (
    add_unique, extract_baggage, first_match, make_passenger, namelist_passengers,
    rule, split_name, type_from_keyword,
)
from ..models import Airline, FlightSegment, JourneyType, Metadata, Passenger
from ..reference import WEEKDAY_TOKENS, airport_name, terminals

logger = logging.getLogger(__name__)

OUTBOUND_RE = re.compile(r"(?i:Originating\s*Flight)|가는\s*편")
RETURN_RE = re.compile(r"(?i:Return\s*Flight)|오는\s*편")

def _has_letter(s: str) -> bool:
    return any(c.isalpha() for c in s)

def _is_dotted_date(s: str) -> bool:
    return bool(to_canonical(s, DateFormat.DOTTED))

RESERVATION_RULES = [
    rule(r"(?i:Booking\s*reference)(?:\s*(?i:no)\.?)?[:\s]*([A-Z0-9]{5,8})\b", validate=_has_letter),
    rule(r"예약번호[:\s]*([A-Z0-9]{5,8})\b", validate=_has_letter),
]
BOOKING_DATE_RULES = [
    rule(r"(?i:Booking\s*date)[:\s]*(\d{4}[.\s]+\d{1,2}[.\s]+\d{1,2})", validate=_is_dotted_date),
    rule(r"예약일자?[:\s]*(\d{4}[.\s]+\d{1,2}[.\s]+\d{1,2})", validate=_is_dotted_date),
]
SEAT_RULES = [
    rule(r"예약석[:\s]*(\d{1,3})\s*석"),
    rule(r"(?i:Reserved\s*Seats)[:\s]*(\d{1,3})"),
]

FLIGHT_RULES = [
    rule(r"(?i:Flight|편명)[:\s]*(7C\s?\d{3,4})\b"),
    rule(r"(?i:Flight|편명)[:\s]*((?:[A-Z]\d|\d[A-Z]|[A-Z]{2})\s?\d{3,4})\b"),
    rule(r"\b(7C\s?\d{3,4})\b"),
]

AIRPORT_RE = re.compile(r"\(([A-Z]{3})\)")
DATETIME_RES = [
    # 2025.10.27(월) 10:30
    re.compile(r"(\d{4}[\s.]+\d{1,2}[\s.]+\d{1,2})\.?\s*\([^)\n]{1,6}\)\s*(\d{1,2}:\d{2})"),
    # 2025.10.27 10:30
    re.compile(r"(\d{4}[\s.]+\d{1,2}[\s.]+\d{1,2})\.?\s+(\d{1,2}:\d{2})"),
]

_MARK = r"(?:가는편|오는편|(?i:Originating\s*Flight|Return\s*Flight))"
_STOP = r"(?=\s*\n|항공|편명|(?i:Flight)|\s*[|=]|$)"

def _is_class_name(s: str) -> bool:
    if re.search(r"터미널|편명|(?i:Terminal|Flight)", s):
        return False
    return not any(c.isdigit() for c in s) and len(s) <= 30

# most specific first; a hit that captured a terminal label or flight number falls through
CLASS_RULES = [
    rule(rf"{_MARK}[ \t]*[|=]+[ \t]*[^|=\n]*[|=]+[ \t]*(?:터미널[ \t]*\d+[ \t]+)?([\w ]+?){_STOP}", validate=_is_class_name),
    rule(rf"{_MARK}[ \t]*[|=]+[ \t]*(?!터미널|(?i:Terminal))([\w ]+?){_STOP}", validate=_is_class_name),
    rule(rf"{_MARK}[ \t]{{2,}}(?:터미널[ \t]*\d+[ \t]+)?([\w ]+?)(?=\s*\n|항공|편명|(?i:Flight)|$)", validate=_is_class_name),
    rule(r"클래스[: \t]*([\w ]+?)(?=\s*\n|\s*$|\s{2,})", validate=_is_class_name),
    rule(r"\b(?i:Class)\b[: \t]*([\w ]+?)(?=\s*\n|\s*$|\s{2,})", validate=_is_class_name),
    rule(r"\b([A-Za-z가-힣]+(?: [A-Za-z가-힣]+)?)\s+GRP\b", validate=_is_class_name),
    rule(r"(?m)^([A-Z])[ \t]*$"),
]

_FARE = r"(성인|소아|유아|(?i:Adult|Child|Infant))"
GROUP_PASSENGER_RES = [
    re.compile(
        _FARE + r"\s+(\d+)\s+([A-Z][A-Z ]+?)"
        r"(?=\s+USD|\s+항공|\s+성인|\s+소아|\s+유아|\s+(?i:Adult|Child|Infant)|\s+\d+/\d+|[ \t]*\n|$)"
    ),
    re.compile(_FARE + r"\s+(\d+)\s+([A-Z]+(?: [A-Z]+){1,3})\b"),
]
INDIVIDUAL_PASSENGER_RE = re.compile(
    _FARE + r"\s+(\d+)\s+([A-Z][A-Z /]*?[A-Z])"
    r"(?=[ \t]*\n|[ \t]+[A-Z]{3}[ \t]+[\d,]+|[ \t]+\d{3,}|[ \t]+[가-힣]{2,}|[ \t]*$)"
)

def _sections(text: str) -> List[str]:
    out = OUTBOUND_RE.search(text)
    if not out:
        return []
    ret = RETURN_RE.search(text, out.end())
    if ret:
        return [text[out.start():ret.start()], text[ret.start():]]
    return [text[out.start():]]

def _parse_section(content: str) -> Optional[FlightSegment]:
    flight_number = first_match(FLIGHT_RULES, content, "jeju.flight").replace(" ", "")
    if not flight_number:
        logger.warning("Jeju Air leg without a flight number discarded")
        return None

    codes: List[str] = []
    for m in AIRPORT_RE.finditer(content):
        code = m.group(1)
        if code in WEEKDAY_TOKENS or (codes and codes[-1] == code):
            continue
        codes.append(code)
        if len(codes) == 2:
            break
    dep_code = codes[0] if codes else ""
    arr_code = codes[1] if len(codes) > 1 else ""

    pairs = []
    for rx in DATETIME_RES:
        pairs = rx.findall(content)
        if len(pairs) >= 2:
            break
    dep_date = dep_time = arr_date = arr_time = ""
    if pairs:
        dep_date = to_canonical(pairs[0][0], DateFormat.DOTTED)
        dep_time = to_24h(pairs[0][1], TimeFormat.H24)
    if len(pairs) > 1:
        arr_date = to_canonical(pairs[1][0], DateFormat.DOTTED)
        arr_time = to_24h(pairs[1][1], TimeFormat.H24)
    arr_date = roll_arrival(dep_date, dep_time, arr_date, arr_time)

    dep_term, arr_term = terminals(dep_code, arr_code)
    return FlightSegment(
        flight_number=flight_number,
        departure_airport_code=dep_code,
        departure_airport_name=airport_name(dep_code),
        departure_date=dep_date,
        departure_time=dep_time,
        departure_terminal=dep_term,
        arrival_airport_code=arr_code,
        arrival_airport_name=airport_name(arr_code),
        arrival_date=arr_date,
        arrival_time=arr_time,
        arrival_terminal=arr_term,
        booking_class=first_match(CLASS_RULES, content, "jeju.class"),
        baggage_allowance=extract_baggage(content),
        not_valid_before=dep_date,
        not_valid_after=dep_date,
    )

def _group_passengers(text: str) -> List[Passenger]:
    best: List[Passenger] = []
    for rx in GROUP_PASSENGER_RES:
        found: List[Passenger] = []
        for m in rx.finditer(text):
            names = split_name(m.group(3), last_first=True)
            if not names:
                continue
            add_unique(found, make_passenger(names[0], names[1], passenger_type=type_from_keyword(m.group(1))))
        if len(found) > len(best):
            best = found
    return best

def _individual_passengers(text: str) -> List[Passenger]:
    found: List[Passenger] = []
    for m in INDIVIDUAL_PASSENGER_RE.finditer(text):
        full = m.group(3).strip()
        if "/" in full:
            last, _, first = full.partition("/")
        else:
            names = split_name(full, last_first=True)
            if not names:
                continue
            last, first = names
        add_unique(found, make_passenger(last, first.replace("/", " "), passenger_type=type_from_keyword(m.group(1))))
    return found

class JejuAirAdapter:
    airline = Airline.JEJU
    supports_namelist = True

    def classify(self, text: str) -> JourneyType:
        out = OUTBOUND_RE.search(text)
        if not out:
            raise ParsingError(self.airline.value, "no Originating Flight / 가는편 section found")
        if RETURN_RE.search(text, out.end()):
            return JourneyType.ROUND_TRIP
        return JourneyType.ONE_WAY

    def extract_metadata(self, text: str) -> Metadata:
        seats = first_match(SEAT_RULES, text, "jeju.seats")
        return Metadata(
            reservation_number=first_match(RESERVATION_RULES, text, "jeju.reservation"),
            booking_date=to_canonical(first_match(BOOKING_DATE_RULES, text, "jeju.booking_date"), DateFormat.DOTTED),
            total_seats=int(seats) if seats else 0,
        )

    def extract_journeys(self, text: str) -> List[FlightSegment]:
        journeys = []
        for content in _sections(text):
            seg = _parse_section(content)
            if seg is not None:
                journeys.append(seg)
        return journeys

    def extract_passengers(self, text: str, is_group: bool) -> List[Passenger]:
        if is_group:
            return _group_passengers(text)
        return _individual_passengers(text)

    def extract_namelist(self, text: str) -> List[Passenger]:
        return namelist_passengers(text)
