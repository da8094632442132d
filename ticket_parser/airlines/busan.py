"""
Air Busan (BX) group namelist PDFs.

There is no itinerary block: the route, PNR and the M/D travel dates are
repeated on every passenger row, e.g.

    1 CEB PUS E8TX89 2/26 3/1 GUBAT VAN VIDAL JR MR 35 ADT
"""
import logging
from typing import List, Optional
import regex as re

from ..dates import canonical_from_parts, canonical_to_date
from ..errors import ParsingError
from ..extractors import NamelistRow, journey_type_for, namelist_passengers, namelist_rows
from ..models import Airline, FlightSegment, JourneyType, Metadata, Passenger
from ..reference import airport_name, terminals

logger = logging.getLogger(__name__)

FLIGHT_RE = re.compile(r"\b(BX)\s?(\d{3,4})\b")
FULL_DATE_RE = re.compile(r"\b(\d{4})[./-](\d{1,2})[./-](\d{1,2})\b")

def _first_row(text: str) -> Optional[NamelistRow]:
    rows = namelist_rows(text)
    return rows[0] if rows else None

def _route_legs(row: NamelistRow):
    # connections repeat the transfer airport ("CEB PUS PUS CJU"), never a PUS-PUS leg
    legs = [(o, d) for o, d in zip(row.route, row.route[1:]) if o != d]
    if row.ret and len(row.route) == 2:
        legs.append((row.route[1], row.route[0]))
    return legs

def _document_year(text: str, before: int) -> Optional[int]:
    m = FULL_DATE_RE.search(text, 0, before)
    return int(m.group(1)) if m else None

def _md_date(md: str, year: Optional[int], not_before: str = "") -> str:
    """Resolve an M/D cell; a date that would precede ``not_before`` moves to the next year."""
    if year is None or not md:
        return ""
    month, _, day = md.partition("/")
    canonical = canonical_from_parts(day, month, year)
    earliest = canonical_to_date(not_before)
    current = canonical_to_date(canonical)
    if earliest and current and current < earliest:
        canonical = canonical_from_parts(day, month, year + 1)
    return canonical

class AirBusanAdapter:
    airline = Airline.BUSAN
    supports_namelist = False

    def classify(self, text: str) -> JourneyType:
        row = _first_row(text)
        jt = journey_type_for(_route_legs(row)) if row else None
        if jt is None:
            raise ParsingError(self.airline.value, "no namelist row found")
        return jt

    def extract_metadata(self, text: str) -> Metadata:
        row = _first_row(text)
        return Metadata(reservation_number=row.pnr if row else "")

    def extract_journeys(self, text: str) -> List[FlightSegment]:
        row = _first_row(text)
        if row is None:
            return []
        flights = list(dict.fromkeys(a + b for a, b in FLIGHT_RE.findall(text)))
        year = _document_year(text, row.start)
        if year is None:
            logger.info("Air Busan namelist without a printed year, travel dates left empty")
        depart = _md_date(row.depart, year)
        back = _md_date(row.ret, year, not_before=depart)

        journeys: List[FlightSegment] = []
        legs = _route_legs(row)
        for i, (origin, dest) in enumerate(legs):
            if i >= len(flights):
                logger.warning("Air Busan leg %s-%s without a flight number discarded", origin, dest)
                continue
            # the return leg flies on the return date, every other leg on the departure date
            is_return = bool(row.ret) and len(row.route) == 2 and i == len(legs) - 1 and i > 0
            day = back if is_return else depart
            dep_term, arr_term = terminals(origin, dest)
            journeys.append(FlightSegment(
                flight_number=flights[i],
                departure_airport_code=origin,
                departure_airport_name=airport_name(origin),
                departure_date=day,
                departure_terminal=dep_term,
                arrival_airport_code=dest,
                arrival_airport_name=airport_name(dest),
                arrival_date=day,
                arrival_terminal=arr_term,
                not_valid_before=day,
                not_valid_after=day,
            ))
        return journeys

    def extract_passengers(self, text: str, is_group: bool) -> List[Passenger]:
        return namelist_passengers(text)

