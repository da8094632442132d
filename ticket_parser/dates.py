"""
Date/time codec.

Canonical dates are ``DD MON YYYY`` (``27 OCT 2025``), canonical times are
24-hour ``HH:MM``. Every function returns ``""`` for input it cannot read;
callers treat an empty date or time as unknown.
"""
from datetime import date, timedelta
from enum import Enum
from typing import Optional, Union
import regex as re
from dateutil import parser as dateparser

from .reference import MONTH_ABBR, MONTH_NUMBER

class DateFormat(str, Enum):
    DOTTED = "dotted"    # 2025.10.27 / 2025. 10. 27
    LONG = "long"        # November 13, 2025
    HYPHEN = "hyphen"    # 13-Nov-2025
    SPACED = "spaced"    # 13 Nov 2025 / 3 nov 2025

class TimeFormat(str, Enum):
    H12 = "12h"          # 09:35 PM
    H24 = "24h"          # 21:35
    COMPACT = "compact"  # 2135 / 2135hr

_CANONICAL_RE = re.compile(r"^\s*(\d{1,2})\s+([A-Za-z]{3})\s+(\d{4})\s*$")
_DOTTED_RE = re.compile(r"^\s*(\d{4})[\s.]+(\d{1,2})[\s.]+(\d{1,2})\.?\s*$")
_LONG_RE = re.compile(r"^\s*[A-Za-z]{3,9}\.?\s+\d{1,2},?\s+\d{4}\s*$")
_HYPHEN_RE = re.compile(r"^\s*\d{1,2}-[A-Za-z]{3,9}-\d{4}\s*$")
_SPACED_RE = re.compile(r"^\s*(\d{1,2})\s+([A-Za-z]{3,9})\.?,?\s+(\d{4})\s*$")

_H12_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([AaPp])\.?\s*[Mm]\.?\s*$")
_H24_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")
_COMPACT_RE = re.compile(r"^\s*(\d{2})(\d{2})\s*(?:hrs?|h)?\s*$", re.I)

def _month_number(month: Union[int, str]) -> Optional[int]:
    if isinstance(month, int):
        return month if 1 <= month <= 12 else None
    m = str(month).strip()
    if m.isdigit():
        return _month_number(int(m))
    return MONTH_NUMBER.get(m[:3].upper())

def _format(d: date) -> str:
    return f"{d.day:02d} {MONTH_ABBR[d.month]} {d.year:04d}"

def canonical_from_parts(day: Union[int, str], month: Union[int, str], year: Union[int, str]) -> str:
    """Build ``DD MON YYYY`` from loose parts; month may be a number, abbreviation or full name."""
    mon = _month_number(month)
    if mon is None:
        return ""
    try:
        return _format(date(int(year), mon, int(day)))
    except (TypeError, ValueError):
        return ""

def canonical_to_date(canonical: str) -> Optional[date]:
    m = _CANONICAL_RE.match(canonical or "")
    if not m:
        return None
    mon = _month_number(m.group(2))
    if mon is None:
        return None
    try:
        return date(int(m.group(3)), mon, int(m.group(1)))
    except ValueError:
        return None

def _from_dateutil(source: str) -> str:
    try:
        dt = dateparser.parse(source, fuzzy=False)
    except (ValueError, OverflowError):
        return ""
    return _format(dt.date()) if dt else ""

def to_canonical(source: str, fmt: DateFormat) -> str:
    if not source:
        return ""
    fmt = DateFormat(fmt)
    if fmt is DateFormat.DOTTED:
        m = _DOTTED_RE.match(source)
        return canonical_from_parts(m.group(3), m.group(2), m.group(1)) if m else ""
    if fmt is DateFormat.SPACED:
        m = _SPACED_RE.match(source)
        return canonical_from_parts(m.group(1), m.group(2), m.group(3)) if m else ""
    if fmt is DateFormat.LONG:
        # the year is mandatory, dateutil would otherwise borrow today's
        return _from_dateutil(source.strip()) if _LONG_RE.match(source) else ""
    if fmt is DateFormat.HYPHEN:
        return _from_dateutil(source.strip()) if _HYPHEN_RE.match(source) else ""
    return ""

def from_canonical(canonical: str, fmt: DateFormat) -> str:
    """Render a canonical date the way the airline prints it."""
    d = canonical_to_date(canonical)
    if d is None:
        return ""
    fmt = DateFormat(fmt)
    mon = MONTH_ABBR[d.month].title()
    if fmt is DateFormat.DOTTED:
        return f"{d.year:04d}.{d.month:02d}.{d.day:02d}"
    if fmt is DateFormat.LONG:
        return f"{d.strftime('%B')} {d.day}, {d.year:04d}"
    if fmt is DateFormat.HYPHEN:
        return f"{d.day:02d}-{mon}-{d.year:04d}"
    return f"{d.day:02d} {mon} {d.year:04d}"

def add_days(canonical: str, days: int) -> str:
    d = canonical_to_date(canonical)
    return _format(d + timedelta(days=days)) if d else ""

def _hhmm(h: int, m: int) -> str:
    if not (0 <= h <= 23 and 0 <= m <= 59):
        return ""
    return f"{h:02d}:{m:02d}"

def to_24h(source: str, fmt: Optional[TimeFormat] = None) -> str:
    """Convert a printed time to ``HH:MM``; with no format the shape decides."""
    if not source:
        return ""
    fmts = [TimeFormat(fmt)] if fmt else [TimeFormat.H12, TimeFormat.H24, TimeFormat.COMPACT]
    for f in fmts:
        if f is TimeFormat.H12:
            m = _H12_RE.match(source)
            if m:
                h = int(m.group(1))
                if not 1 <= h <= 12:
                    return ""
                pm = m.group(3).upper() == "P"
                if pm and h != 12: h += 12
                if not pm and h == 12: h = 0
                return _hhmm(h, int(m.group(2)))
        elif f is TimeFormat.H24:
            m = _H24_RE.match(source)
            if m:
                return _hhmm(int(m.group(1)), int(m.group(2)))
        elif f is TimeFormat.COMPACT:
            m = _COMPACT_RE.match(source)
            if m:
                return _hhmm(int(m.group(1)), int(m.group(2)))
    return ""

def from_24h(hhmm: str, fmt: TimeFormat) -> str:
    canon = to_24h(hhmm, TimeFormat.H24)
    if not canon:
        return ""
    h, m = int(canon[:2]), canon[3:]
    fmt = TimeFormat(fmt)
    if fmt is TimeFormat.H12:
        suffix = "PM" if h >= 12 else "AM"
        return f"{(h % 12) or 12:02d}:{m} {suffix}"
    if fmt is TimeFormat.COMPACT:
        return f"{h:02d}{m}"
    return canon

def roll_arrival(dep_date: str, dep_time: str, arr_date: str, arr_time: str) -> str:
    """
    Arrival date after next-day rollover.

    A missing arrival date means "same day as departure". When both legs sit on
    the same day but the arrival clock reads earlier than departure, the flight
    crossed midnight and lands the following calendar day.
    """
    if not dep_date:
        return arr_date or ""
    arr_date = arr_date or dep_date
    if arr_date == dep_date and dep_time and arr_time and arr_time < dep_time:
        return add_days(dep_date, 1) or arr_date
    return arr_date
