"""Canonical biomarker names and units for extracted lab values."""
from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Optional, Tuple

from labtrack.services.biomarkers import DEFAULT_BENCHMARKS

EXACT = 1.0
ALIAS = 0.95
FUZZY = 0.8
UNKNOWN = 0.3

# newValue = value * factor, keyed by lowercase canonical name then from-unit then to-unit
CONVERSIONS: Dict[str, Dict[str, Dict[str, float]]] = {
    "serum iron": {
        "µg/dL": {"µmol/L": 0.179},
        "µmol/L": {"µg/dL": 5.585},
        "mg/dL": {"µmol/L": 17.9},
    },
    "tibc": {
        "µg/dL": {"µmol/L": 0.179},
        "µmol/L": {"µg/dL": 5.585, "mg/dL": 0.05585},
        "mg/dL": {"µmol/L": 17.9},
    },
    "creatinine": {
        "mg/dL": {"µmol/L": 88.4},
        "µmol/L": {"mg/dL": 0.0113},
    },
    "fasting glucose": {
        "mg/dL": {"mmol/L": 0.0555},
        "mmol/L": {"mg/dL": 18.02},
    },
    "bun": {
        "mg/dL": {"mmol/L": 0.357},
        "mmol/L": {"mg/dL": 2.8},
    },
    "calcium": {
        "mg/dL": {"mmol/L": 0.25},
        "mmol/L": {"mg/dL": 4.0},
    },
    "serum magnesium": {
        "mg/dL": {"mmol/L": 0.411},
        "mmol/L": {"mg/dL": 2.43},
    },
    "triglycerides": {
        "mg/dL": {"mmol/L": 0.0113},
        "mmol/L": {"mg/dL": 88.57},
    },
    "total cholesterol": {
        "mg/dL": {"mmol/L": 0.0259},
        "mmol/L": {"mg/dL": 38.67},
    },
    "hdl cholesterol": {
        "mg/dL": {"mmol/L": 0.0259},
        "mmol/L": {"mg/dL": 38.67},
    },
    "ldl cholesterol": {
        "mg/dL": {"mmol/L": 0.0259},
        "mmol/L": {"mg/dL": 38.67},
    },
    "uric acid": {
        "mg/dL": {"µmol/L": 59.48},
        "µmol/L": {"mg/dL": 0.0168},
    },
    "total bilirubin": {
        "mg/dL": {"µmol/L": 17.1},
        "µmol/L": {"mg/dL": 0.0585},
    },
}
CONVERSIONS["glucose"] = CONVERSIONS["fasting glucose"]

# Applied in order; symbol fixes first, then case fixes.
_UNIT_REWRITES: List[Tuple[re.Pattern, str]] = [
    (re.compile(r"\bmcg\b", re.I), "µg"),
    (re.compile(r"\bug\b", re.I), "µg"),
    (re.compile(r"μ"), "µ"),
    (re.compile(r"\bumol\b", re.I), "µmol"),
    (re.compile(r"\buIU\b", re.I), "µIU"),
    (re.compile(r"\buL\b", re.I), "µL"),
    (re.compile(r"\bmU/L\b", re.I), "mIU/L"),
    (re.compile(r"Mio\.?/[uµ]L"), "×10¹²/L"),
    (re.compile(r"mio\.?/[uµ]L"), "×10³/µL"),
    (re.compile(r"Mil\.?/[uµ]L", re.I), "×10¹²/L"),
    (re.compile(r"(?:[x×*]\s*)?10\^3", re.I), "×10³"),
    (re.compile(r"(?:[x×*]\s*)?10\^12", re.I), "×10¹²"),
    (re.compile(r"K/uL", re.I), "K/µL"),
    (re.compile(r"M/uL", re.I), "M/µL"),
    (re.compile(r"/l\b"), "/L"),
    (re.compile(r"/dl\b", re.I), "/dL"),
    (re.compile(r"\bmmol/l\b", re.I), "mmol/L"),
    (re.compile(r"\bmg/dl\b", re.I), "mg/dL"),
    (re.compile(r"\bg/dl\b", re.I), "g/dL"),
    (re.compile(r"\bg/l\b", re.I), "g/L"),
    (re.compile(r"\bng/ml\b", re.I), "ng/mL"),
    (re.compile(r"\bpg/ml\b", re.I), "pg/mL"),
    (re.compile(r"\bpmol/l\b", re.I), "pmol/L"),
    (re.compile(r"\bnmol/l\b", re.I), "nmol/L"),
    (re.compile(r"\bmiu/l\b", re.I), "mIU/L"),
    (re.compile(r"\biu/l\b", re.I), "IU/L"),
    (re.compile(r"\bu/l\b", re.I), "U/L"),
]

_FUZZY_PREFIX = re.compile(r"^(serum|plasma|blood|total|free)\s+", re.I)
_FUZZY_SUFFIX = re.compile(r"\s+(serum|level|count)$", re.I)
_WBC_DIFFERENTIALS = ("NEUTROPHILS", "LYMPHOCYTES", "MONOCYTES", "EOSINOPHILS", "BASOPHILS")


def normalize_key(text: str) -> str:
    key = re.sub(r"\s+", " ", (text or "").lower().strip())
    return key.replace("–", "-").replace("—", "-")


def normalize_unit_symbols(unit: str) -> str:
    if not unit:
        return ""
    out = unit.strip()
    for pattern, repl in _UNIT_REWRITES:
        out = pattern.sub(repl, out)
    return out


def format_number(value: float) -> str:
    """Two decimals, trailing zeros dropped: 5.50 -> "5.5", 90.00 -> "90"."""
    text = f"{value:.2f}"
    return text.rstrip("0").rstrip(".") if "." in text else text


def parse_float(value: Any) -> Optional[float]:
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return number


class BiomarkerNormalizer:
    """Alias lookup over a benchmark list (defaults unless given custom ones)."""

    def __init__(self, benchmarks: Optional[Iterable[Dict[str, Any]]] = None):
        self.benchmarks = list(benchmarks if benchmarks is not None else DEFAULT_BENCHMARKS)
        self._canonical: Dict[str, str] = {}
        self._aliases: Dict[str, str] = {}
        self._units: Dict[str, str] = {}
        for b in self.benchmarks:
            name = b["name"]
            self._canonical[normalize_key(name)] = name
            for alias in b.get("aliases") or []:
                self._aliases.setdefault(normalize_key(alias), name)
            units = b.get("units") or []
            if units:
                self._units[name.lower()] = units[0]

    def lookup(self, key: str) -> Tuple[Optional[str], float]:
        if key in self._canonical:
            return self._canonical[key], EXACT
        if key in self._aliases:
            return self._aliases[key], ALIAS
        return None, UNKNOWN

    def normalize_name(self, name: str) -> Dict[str, Any]:
        canonical, confidence = self.lookup(normalize_key(name))
        if canonical:
            return {"canonical_name": canonical, "original_name": name, "confidence": confidence}

        cleaned = _FUZZY_SUFFIX.sub("", _FUZZY_PREFIX.sub("", name or ""))
        canonical, _ = self.lookup(normalize_key(cleaned))
        if canonical:
            return {"canonical_name": canonical, "original_name": name, "confidence": FUZZY}

        return {"canonical_name": name, "original_name": name, "confidence": UNKNOWN}

    def target_unit(self, name: str) -> Optional[str]:
        return self._units.get((name or "").lower())

    def convert_unit(self, name: str, value: str, unit: str) -> Dict[str, Any]:
        """Normalise ``unit`` and convert ``value`` to the benchmark's primary unit when a factor is known."""
        unit_out = normalize_unit_symbols(unit)
        value_out = value
        converted = False

        target = self.target_unit(name)
        if target:
            target = normalize_unit_symbols(target)
            if unit_out and unit_out != target:
                factor = CONVERSIONS.get(name.lower(), {}).get(unit_out, {}).get(target)
                number = parse_float(value)
                if factor is not None and number is not None:
                    value_out = format_number(number * factor)
                    unit_out = target
                    converted = True
            elif not unit_out:
                unit_out = target

        upper = name.upper()
        if "ALBUMIN" in upper and "GLOBULIN" not in upper and "%" in unit_out:
            unit_out, converted = "g/L", True
        if upper == "RBC" and re.search(r"mio|mil", unit_out, re.I):
            unit_out, converted = "×10¹²/L", True
        if any(d in upper for d in _WBC_DIFFERENTIALS) and "%" in unit_out:
            unit_out, converted = "×10³/µL", True

        return {"unit": unit_out, "value": value_out, "conversion_applied": converted}

    def normalize(self, biomarker: Dict[str, Any]) -> Dict[str, Any]:
        raw_name = str(biomarker.get("name") or "").strip()
        raw_value = str(biomarker.get("value") or "").strip()
        raw_unit = str(biomarker.get("unit") or "").strip()

        name_info = self.normalize_name(raw_name)
        unit_info = self.convert_unit(name_info["canonical_name"], raw_value, raw_unit)
        out = {
            "name": name_info["canonical_name"],
            "value": unit_info["value"],
            "unit": unit_info["unit"],
            "normalization": {
                "original_name": raw_name,
                "original_value": raw_value,
                "original_unit": raw_unit,
                "confidence": name_info["confidence"],
                "conversion_applied": unit_info["conversion_applied"],
                "is_numeric": parse_float(raw_value) is not None,
            },
        }
        if biomarker.get("test_date"):
            out["test_date"] = biomarker["test_date"]
        return out

    def normalize_batch(self, biomarkers: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return [self.normalize(b) for b in biomarkers]


def normalize_biomarkers(
    biomarkers: Iterable[Dict[str, Any]],
    benchmarks: Optional[Iterable[Dict[str, Any]]] = None,
) -> List[Dict[str, Any]]:
    return BiomarkerNormalizer(benchmarks).normalize_batch(biomarkers)


__all__ = [
    "BiomarkerNormalizer",
    "normalize_biomarkers",
    "normalize_unit_symbols",
    "normalize_key",
    "format_number",
    "parse_float",
    "CONVERSIONS",
]
