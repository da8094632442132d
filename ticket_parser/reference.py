
import os
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple
import yaml

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")
REFERENCE_PATH = os.path.join(DATA_DIR, "reference.yaml")

# 10 or more seats under one reference make a group booking
GROUP_SEAT_THRESHOLD = 10

# (upper bound exclusive, passenger type)
AGE_BANDS = ((2, "Infant"), (12, "Child"))

WEEKDAY_TOKENS = frozenset({"MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN"})

@lru_cache(maxsize=1)
def _load() -> Dict[str, Any]:
    with open(REFERENCE_PATH, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    data.setdefault("airports", {})
    data.setdefault("terminals", {})
    data.setdefault("months", {})
    data.setdefault("header_tokens", [])
    return data

AIRPORT_NAME_BY_CODE: Mapping[str, str] = MappingProxyType(dict(_load()["airports"]))
TERMINALS_BY_ROUTE: Mapping[str, Tuple[str, str]] = MappingProxyType(
    {route: (str(pair[0]), str(pair[1])) for route, pair in _load()["terminals"].items()}
)
MONTH_NUMBER: Mapping[str, int] = MappingProxyType({k.upper(): int(v) for k, v in _load()["months"].items()})
MONTH_ABBR: Mapping[int, str] = MappingProxyType({v: k for k, v in MONTH_NUMBER.items()})
HEADER_TOKENS = frozenset(str(t).upper() for t in _load()["header_tokens"])

def airport_name(code: str) -> str:
    """Display name for an airport code; unknown codes come back as-is."""
    code = (code or "").strip().upper()
    return AIRPORT_NAME_BY_CODE.get(code, code)

def terminals(origin: str, destination: str) -> Tuple[str, str]:
    """(departure, arrival) terminal numbers, or ('', '') when the route is not listed."""
    key = f"{(origin or '').upper()}-{(destination or '').upper()}"
    return TERMINALS_BY_ROUTE.get(key, ("", ""))

def is_known_airport(code: str) -> bool:
    return (code or "").upper() in AIRPORT_NAME_BY_CODE
