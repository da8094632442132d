import math
import unicodedata
from typing import Dict, List, Tuple
import regex as re

CJK = r"[\p{Hangul}\p{Han}\p{Hiragana}\p{Katakana}]"

# horizontal whitespace only, line structure is kept for the extractors
_CJK_GAP_RE = re.compile(rf"(?<={CJK})[ \t\u00A0\u3000]+(?={CJK})")

# (pattern, canonical spelling); applied in order after the CJK gap pass
LABEL_CANON: List[Tuple[str, str]] = [
    (r"(?i)\bbooking\s+reference\b", "Booking Reference"),
    (r"(?i)\bbooking\s+date\b", "Booking date"),
    (r"(?i)\boriginating\s+flight\b", "Originating Flight"),
    (r"(?i)\breturn\s+flight\b", "Return Flight"),
    (r"(?i)\breserved\s+seats\b", "Reserved Seats"),
    (r"예\s*약\s*번\s*호", "예약번호"),
    (r"예\s*약\s*날\s*짜", "예약날짜"),
    (r"예\s*약\s*석", "예약석"),
    (r"영\s*문\s*성", "영문성"),
    (r"영\s*문\s*이\s*름", "영문이름"),
    (r"성\s*별", "성별"),
    (r"여\s*권\s*번\s*호", "여권번호"),
    (r"생\s*년\s*월\s*일", "생년월일"),
    (r"가\s*는\s*편", "가는편"),
    (r"오\s*는\s*편", "오는편"),
    (r"클\s*래\s*스", "클래스"),
    (r"터\s*미\s*널", "터미널"),
]
_LABEL_RES = [(re.compile(p), repl) for p, repl in LABEL_CANON]

def normalize_text(s: str) -> str:
    """
    Undo PDF text-extraction artifacts before any pattern runs:
    spaces injected between CJK characters ("예 약 번 호" -> "예약번호")
    and spaced variants of the recurring field labels.
    """
    if not s:
        return ""
    s = _CJK_GAP_RE.sub("", s)
    for rx, repl in _LABEL_RES:
        s = rx.sub(repl, s)
    return s

def fold_text(s: str) -> str:
    """Lowercase, strip accents, collapse whitespace."""
    if not s:
        return ""
    s = unicodedata.normalize("NFKD", s)
    s = "".join([c for c in s if not unicodedata.combining(c)])
    s = s.lower()
    s = re.sub(r'\s+', ' ', s).strip()
    return s

def collapse_ws(s: str) -> str:
    return re.sub(r"\s+", " ", s or "").strip()

def softmax(scores: Dict[str, float], temperature: float = 1.0) -> Dict[str, float]:
    """Convert class scores to probabilities."""
    if not scores:
        return {}
    # Stability
    vals = list(scores.values())
    if len(set(vals)) == 1 and next(iter(set(vals))) == 0:
        # all zeros -> uniform
        n = len(scores)
        return {k: 1.0/n for k in scores}
    mx = max(scores.values())
    exps = {k: math.exp((v - mx)/max(1e-6, temperature)) for k, v in scores.items()}
    total = sum(exps.values()) or 1.0
    return {k: exps[k]/total for k in scores}

