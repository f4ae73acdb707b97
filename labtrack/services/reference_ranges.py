"""Parse optimal-range strings such as "4.2-6.4 mmol/L (162-240 mg/dL)" and classify values against them."""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from labtrack.services.normalizer import normalize_unit_symbols

Reference = Dict[str, Any]

NUM = r"\d+(?:\.\d+)?"
_UNIT = r"(?P<unit>[^\s(),;]*)"
RANGE_TOKEN = re.compile(
    r"(?:(?P<lo>" + NUM + r")\s*[-–]\s*(?P<hi>" + NUM + r")"
    r"|(?P<op><=|>=|≤|≥|<|>)\s*(?P<v>" + NUM + r"))\s*" + _UNIT
)
_OPS = {"<": "lt", "<=": "lte", "≤": "lte", ">": "gt", ">=": "gte", "≥": "gte"}
_NON_NUMERIC = re.compile(r"[^0-9.\-]")


def _unit_key(unit: str) -> str:
    return normalize_unit_symbols(unit or "").lower()


def find_ranges(text: str) -> List[Reference]:
    """Every range expression in ``text``, in order of appearance."""
    found: List[Reference] = []
    for match in RANGE_TOKEN.finditer(text or ""):
        unit = match.group("unit") or ""
        if match.group("op"):
            found.append({"kind": _OPS[match.group("op")], "v": float(match.group("v")), "unit": unit})
        else:
            found.append({
                "kind": "between",
                "lo": float(match.group("lo")),
                "hi": float(match.group("hi")),
                "unit": unit,
            })
    return found


def parse_range(text: str, unit: Optional[str] = None) -> Optional[Reference]:
    """Pick the range whose unit matches ``unit``, else the first range in the string."""
    ranges = find_ranges(text)
    if not ranges:
        return None
    wanted = _unit_key(unit or "")
    if wanted:
        for ref in ranges:
            if _unit_key(ref["unit"]) == wanted:
                return ref
    return ranges[0]


def parse_value(value: Any) -> Optional[float]:
    """Numeric part of a reported value ("<0.1" -> 0.1); None for "N/A" or text."""
    if value is None:
        return None
    text = str(value).strip()
    if not text or text.upper() == "N/A":
        return None
    cleaned = _NON_NUMERIC.sub("", text)
    try:
        return float(cleaned)
    except ValueError:
        return None


def compare_to_range(value: float, reference: Dict[str, Any]) -> Optional[str]:
    kind = reference.get("kind") if reference else None
    if not kind:
        return None
    if kind == "lte":
        return "high" if value > reference["v"] else "normal"
    if kind == "lt":
        return "high" if value >= reference["v"] else "normal"
    if kind == "gte":
        return "low" if value < reference["v"] else "normal"
    if kind == "gt":
        return "low" if value <= reference["v"] else "normal"
    if kind == "between":
        lo, hi = reference["lo"], reference["hi"]
        if value < lo:
            return "low"
        if value > hi:
            return "high"
        return "normal"
    return None


def value_status(value: Any, optimal_range: str, unit: Optional[str] = None) -> str:
    """'in-range', 'out-of-range' or 'unknown' (missing value or unparseable range)."""
    number = parse_value(value)
    if number is None:
        return "unknown"
    reference = parse_range(optimal_range or "", unit)
    verdict = compare_to_range(number, reference) if reference else None
    if verdict is None:
        return "unknown"
    return "in-range" if verdict == "normal" else "out-of-range"


__all__ = [
    "find_ranges",
    "parse_range",
    "parse_value",
    "compare_to_range",
    "value_status",
]
