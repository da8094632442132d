import logging
from dataclasses import replace
from typing import Dict, List, Sequence, Tuple

from .models import Passenger
from .utils import collapse_ws

logger = logging.getLogger(__name__)

_FILLABLE = ("gender", "passenger_type", "ticket_number")

def match_key(p: Passenger) -> Tuple[str, str]:
    return collapse_ws(p.last_name).upper(), collapse_ws(p.first_name).upper()

def merge(primary: Sequence[Passenger], secondary: Sequence[Passenger]) -> List[Passenger]:
    """
    Merge a namelist into the e-ticket passenger list.

    Matching is on (last, first) ignoring case and spacing. A matched entry
    only gets its empty fields filled; unmatched namelist entries are appended
    after the e-ticket ones. Inputs are left untouched.
    """
    merged = [replace(p) for p in primary]
    index: Dict[Tuple[str, str], int] = {}
    for i, p in enumerate(merged):
        index.setdefault(match_key(p), i)

    filled = added = 0
    for extra in secondary:
        k = match_key(extra)
        if k in index:
            target = merged[index[k]]
            updates = {f: getattr(extra, f) for f in _FILLABLE if not getattr(target, f) and getattr(extra, f)}
            if updates:
                merged[index[k]] = replace(target, **updates)
                filled += 1
            continue
        index[k] = len(merged)
        merged.append(replace(extra))
        added += 1
    logger.debug("namelist merge: %d enriched, %d appended", filled, added)
    return merged
