from typing import Dict, Any, Optional
import os
import yaml

from .models import Airline

DEFAULT_RULES_PATH = os.path.join(os.path.dirname(__file__), "data", "rules.yaml")

def load_rules(path: Optional[str] = None) -> Dict[str, Any]:
    with open(path or DEFAULT_RULES_PATH, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    # YAML reads unquoted keys like 7C as strings, but be safe with str()
    data = {str(k).upper(): v or {} for k, v in data.items()}
    # Ensure every supported airline exists
    for code in [a.value for a in Airline]:
        data.setdefault(code, {"keywords": [], "phrases": [], "regexes": [], "temperature": 1.0})
        data[code].setdefault("keywords", [])
        data[code].setdefault("phrases", [])
        data[code].setdefault("regexes", [])
        data[code].setdefault("temperature", 1.0)
    return data
