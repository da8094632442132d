from typing import Dict, Any, Optional, Tuple
import regex as re
from rapidfuzz import fuzz

from .rules import load_rules
from .utils import fold_text, softmax

def score_text(text: str, rules: Dict[str, Any]) -> Dict[str, float]:
    """
    Compute raw scores per airline using rules: keywords, phrases, regexes.
    Uses basic counts and a fuzzy boost for keywords broken up by extraction.
    """
    norm = fold_text(text)
    scores = {code: 0.0 for code in rules.keys()}
    for code, cfg in rules.items():
        score = 0.0
        for kw in cfg.get("keywords", []):
            kw = fold_text(kw)
            count = norm.count(kw)
            score += 1.0 * count
            if count == 0:
                # fuzzy boost
                sim = fuzz.partial_ratio(kw, norm[:10000]) / 100.0
                if sim > 0.9:
                    score += 0.5
        for phr in cfg.get("phrases", []):
            count = norm.count(fold_text(phr))
            score += 1.5 * count
        for rx in cfg.get("regexes", []):
            pat = rx.get("pattern")
            w = float(rx.get("weight", 1.0))
            try:
                matches = re.findall(pat, text or "", flags=re.IGNORECASE)
            except re.error:
                continue
            score += w * len(matches)
        scores[code] = score
    return scores

def detect_airline(text: str, rules: Optional[Dict[str, Any]] = None) -> Tuple[Dict[str, float], str, float]:
    """
    Return (probs, top_code, top_prob) as floats 0..1
    """
    if rules is None:
        rules = load_rules()
    scores = score_text(text, rules)
    # temperature per-airline (use average)
    temps = [float(cfg.get("temperature", 1.0)) for cfg in rules.values()]
    avg_temp = sum(temps)/len(temps) if temps else 1.0
    probs = softmax(scores, temperature=avg_temp)
    top_code = max(probs, key=probs.get)
    return probs, top_code, probs[top_code]
