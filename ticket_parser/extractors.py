"""
Extraction primitives shared by the airline adapters: ordered pattern
cascades, passenger name/title handling and the tabular namelist rows that
both Air Busan and Jeju Air hand out.
"""
import logging
from typing import Callable, List, NamedTuple, Optional, Pattern, Sequence, Tuple, Union
import regex as re

from .models import JourneyType, Passenger
from .reference import AGE_BANDS, AIRPORT_NAME_BY_CODE, HEADER_TOKENS
from .utils import collapse_ws

logger = logging.getLogger(__name__)

# =========================
# Constants & small helpers
# =========================

TITLE_TO_GENDER = {
    "MR": "Mr", "MS": "Ms", "MRS": "Mrs", "MISS": "Miss",
    "MSTR": "Mr", "MISTER": "Mr",
}
CHILD_TITLES = {"MSTR"}

# longest first so MRS / MSTR are not cut down to MR / MS
TITLE_ALT = "|".join(sorted(TITLE_TO_GENDER, key=len, reverse=True))

FARE_TYPE_WORDS = {
    "ADULT": "Adult", "ADT": "Adult", "성인": "Adult",
    "CHILD": "Child", "CHD": "Child", "소아": "Child", "어린이": "Child",
    "INFANT": "Infant", "INF": "Infant", "유아": "Infant",
}

_NAME_PART_RE = re.compile(r"^\p{L}+(?: \p{L}+)*$")

def title_case(part: str) -> str:
    def fix_token(tok: str) -> str:
        if not tok:
            return tok
        t = tok.lower()
        if t.startswith("mc") and len(t) > 2:
            return "Mc" + t[2:].title()
        return t.title()
    return " ".join(fix_token(t) for t in (part or "").split() if t)

# ======================
# Ordered pattern cascade
# ======================

class Rule(NamedTuple):
    pattern: Pattern
    group: Union[int, str] = 1
    validate: Optional[Callable[[str], bool]] = None

def rule(pattern: str, group: Union[int, str] = 1, validate: Optional[Callable[[str], bool]] = None, flags: int = 0) -> Rule:
    return Rule(re.compile(pattern, flags), group, validate)

def first_match(rules: Sequence[Rule], text: str, field: str = "field", default: str = "") -> str:
    """
    Try each rule in order and return the first capture that passes the
    rule's validator. Only the first hit of each pattern is considered; a
    rejected hit falls through to the next rule, never to a guess.
    """
    for i, r in enumerate(rules):
        m = r.pattern.search(text or "")
        if not m:
            continue
        value = collapse_ws(m.group(r.group) or "")
        if not value:
            continue
        if r.validate is not None and not r.validate(value):
            logger.debug("%s: rule %d rejected %r", field, i, value)
            continue
        logger.debug("%s: rule %d matched %r", field, i, value)
        return value
    logger.debug("%s: no rule matched", field)
    return default

_BAGGAGE_RULES = [
    rule(r"(?i)\b(\d{1,3})\s*kgs?\b"),
    rule(r"(?i)\b(\d)\s*(?:pc|pcs|piece|pieces)\b"),
]

def extract_baggage(text: str) -> str:
    """First baggage allowance in ``text`` as ``20kg`` / ``1PC``."""
    m = _BAGGAGE_RULES[0].pattern.search(text or "")
    if m:
        return f"{int(m.group(1))}kg"
    m = _BAGGAGE_RULES[1].pattern.search(text or "")
    if m:
        return f"{int(m.group(1))}PC"
    return ""

def journey_type_for(legs: Sequence[Tuple[str, str]]) -> Optional[JourneyType]:
    """
    Classify an ordered list of (origin, destination) legs. The first leg is
    the outbound one; its exact reverse as the only other leg is a return.
    """
    distinct = list(dict.fromkeys(legs))
    if not distinct:
        return None
    if len(distinct) == 1:
        return JourneyType.ONE_WAY
    if len(distinct) == 2 and distinct[1] == distinct[0][::-1]:
        return JourneyType.ROUND_TRIP
    return JourneyType.MULTI_CITY

# =================
# Passenger helpers
# =================

def valid_name_part(s: str) -> bool:
    return bool(s) and bool(_NAME_PART_RE.match(s))

def split_name(full: str, last_first: bool) -> Optional[Tuple[str, str]]:
    """
    Split a single "LAST FIRST..." or "FIRST... LAST" run into (last, first).
    The order is an airline convention, never guessed per row.
    """
    parts = collapse_ws(full).split(" ")
    if len(parts) < 2 or not parts[0]:
        return None
    if last_first:
        return parts[0], " ".join(parts[1:])
    return parts[-1], " ".join(parts[:-1])

def type_from_keyword(word: str) -> str:
    return FARE_TYPE_WORDS.get(collapse_ws(word).replace(" ", "").upper(), "")

def type_from_age(age: int) -> str:
    for bound, ptype in AGE_BANDS:
        if age < bound:
            return ptype
    return "Adult"

def make_passenger(last: str, first: str, title: str = "", passenger_type: str = "", ticket_number: str = "") -> Optional[Passenger]:
    """Build a passenger, or None when either name part is not alphabetic."""
    last, first = collapse_ws(last), collapse_ws(first)
    if not valid_name_part(last) or not valid_name_part(first):
        logger.debug("discarding name candidate %r / %r", last, first)
        return None
    t = (title or "").upper().rstrip(".")
    if t in CHILD_TITLES:
        passenger_type = "Child"
    return Passenger(
        last_name=last,
        first_name=first,
        gender=TITLE_TO_GENDER.get(t, ""),
        passenger_type=passenger_type,
        ticket_number=ticket_number or "",
    )

def add_unique(passengers: List[Passenger], candidate: Optional[Passenger]) -> bool:
    if candidate is None:
        return False
    if any(p.key == candidate.key for p in passengers):
        logger.debug("duplicate passenger %s %s skipped", candidate.last_name, candidate.first_name)
        return False
    passengers.append(candidate)
    return True

# ======================
# Tabular namelist rows
# ======================

# "1 CEB PUS E8TX89 2/26 3/1 GUBAT VAN VIDAL JR MR"
NAMELIST_ROW_RE = re.compile(
    r"(?<!\S)(?P<seq>\d{1,3})\s+"
    r"(?P<route>[A-Z]{3}(?:\s+[A-Z]{3}){1,3})\s+"
    r"(?P<pnr>[A-Z0-9]{5,7})\s+"
    r"(?P<dep>\d{1,2}/\d{1,2})\s+(?P<ret>\d{1,2}/\d{1,2})\s+"
    r"(?P<surname>[A-Z]+)\s+"
    r"(?P<given>[A-Z]+(?:[ \t]+[A-Z]+)*?)\s+"
    rf"(?P<title>{TITLE_ALT})(?=\s|$)"
)
_AGE_RE = re.compile(r"(?<!\S)(\d{1,3})\s+(ADT|CHD|INF)\b")
_CLASS_RE = re.compile(r"(?<!\S)(ADT|CHD|INF)\b")

class NamelistRow(NamedTuple):
    seq: int
    route: Tuple[str, ...]
    pnr: str
    depart: str     # M/D as printed
    ret: str
    surname: str
    given: str
    title: str
    passenger_type: str
    start: int

def namelist_rows(text: str) -> List[NamelistRow]:
    """
    Every structurally valid passenger row of a namelist table, in order.
    Rows whose surname is really an airport or header token are dropped.
    """
    matches = list(NAMELIST_ROW_RE.finditer(text or ""))
    rows: List[NamelistRow] = []
    for i, m in enumerate(matches):
        route = tuple(m.group("route").split())
        surname = m.group("surname")
        if surname in HEADER_TOKENS or surname in AIRPORT_NAME_BY_CODE or surname in route:
            logger.debug("namelist row %s: surname %r looks like a code, skipped", m.group("seq"), surname)
            continue
        # age / fare class live in the columns after the title, up to the next row
        tail_end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        tail = text[m.end():tail_end]
        ptype = ""
        am = _AGE_RE.search(tail)
        if am:
            ptype = type_from_age(int(am.group(1)))
        else:
            cm = _CLASS_RE.search(tail)
            if cm:
                ptype = type_from_keyword(cm.group(1))
        rows.append(NamelistRow(
            seq=int(m.group("seq")),
            route=route,
            pnr=m.group("pnr"),
            depart=m.group("dep"),
            ret=m.group("ret"),
            surname=surname,
            given=collapse_ws(m.group("given")),
            title=m.group("title"),
            passenger_type=ptype,
            start=m.start(),
        ))
    return rows

def namelist_passengers(text: str) -> List[Passenger]:
    passengers: List[Passenger] = []
    for row in namelist_rows(text):
        add_unique(passengers, make_passenger(row.surname, row.given, row.title, row.passenger_type or "Adult"))
    return passengers
