"""Biomarker and patient-info extraction through the Anthropic Messages API."""
from __future__ import annotations

import json
import logging
import os
import re
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

import anthropic

from labtrack.services.documents import ProcessedDocument

logger = logging.getLogger("labtrack")

ANTHROPIC_MODEL = os.getenv("ANTHROPIC_MODEL", "claude-3-5-haiku-20241022")
MAX_TOKENS = 4096
GENDERS = {"male", "female", "other"}
_GENDER_ALIASES = {"m": "male", "f": "female", "man": "male", "woman": "female"}

EXTRACTION_PROMPT = """You are an expert health data analyst specializing in clinical pathology and nutritional biochemistry.

Your task is to extract PATIENT INFORMATION and ALL biomarker values from the provided laboratory result.

INSTRUCTIONS:
1. Carefully scan every page of the document.
2. Extract PATIENT DEMOGRAPHIC INFORMATION:
   - Patient's full name (as shown on the lab report)
   - Patient's date of birth (YYYY-MM-DD)
   - Patient's gender/sex (male, female, or other)
   - Test/collection date (the most recent date if several, YYYY-MM-DD)
3. Extract EVERY biomarker name, its numerical value, and unit of measurement.
4. If a biomarker appears multiple times, use the MOST RECENT value.
5. Include, when present: liver function (ALP, ALT, AST, GGT, Total Bilirubin), kidney function
   (BUN, Creatinine, eGFR), proteins (Albumin, Globulin, Total Protein), electrolytes (Sodium,
   Potassium, Chloride, Bicarbonate), minerals (Calcium, Magnesium, Phosphate), complete blood
   count with differential, lipids, metabolic markers (Fasting Glucose, HbA1c, Fasting Insulin),
   hormones and thyroid markers, thyroid antibodies, iron studies, vitamins (D, B12, Folate),
   Homocysteine and LDH.

Return ONLY a valid JSON object with this EXACT structure:
{
  "patientInfo": {
    "name": "Patient Full Name or null",
    "dateOfBirth": "YYYY-MM-DD or null",
    "gender": "male, female, other, or null",
    "testDate": "YYYY-MM-DD or null"
  },
  "biomarkers": [
    {"name": "Biomarker Name", "value": "numerical value only", "unit": "unit of measurement"}
  ]
}

RULES:
- Use the biomarker names exactly as they appear in the report.
- Values are numbers only; for "<0.1" extract "0.1".
- Include the unit exactly as shown.
- Use null for any patient field that is not present.
- Do NOT include any explanatory text, only the JSON object.
"""

PANEL_RULES: List[Tuple[str, Tuple[str, ...]]] = [
    ("CBC", ("wbc", "rbc", "hemoglobin", "hematocrit")),
    ("Lipid Panel", ("cholesterol", "hdl", "ldl", "triglyceride")),
    ("Hormone Panel", ("testosterone", "estrogen", "cortisol", "dhea")),
    ("Metabolic Panel", ("glucose", "sodium", "potassium", "creatinine")),
    ("Thyroid Panel", ("tsh", "t3", "t4", "thyroid")),
    ("Iron Studies", ("iron", "ferritin", "tibc")),
    ("Vitamin Panel", ("vitamin", "b12", "folate")),
    ("Heavy Metals", ("lead", "mercury", "arsenic", "cadmium")),
]

_FENCED = re.compile(r"```(?:json)?\s*(\{.*\})\s*```", re.DOTALL)
_JSON_OBJECT = re.compile(r"\{.*\"biomarkers\".*\}", re.DOTALL)


class ExtractionError(RuntimeError):
    """Raised when the extraction API call or its response cannot be used."""


@dataclass
class ExtractionResult:
    filename: str
    biomarkers: List[Dict[str, str]]
    patient_info: Dict[str, Optional[str]]
    panel_name: str
    raw: str = ""
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filename": self.filename,
            "biomarkers": self.biomarkers,
            "patient_info": self.patient_info,
            "panel_name": self.panel_name,
            "warnings": self.warnings,
        }


# ---- API key handling ----
def validate_api_key(api_key: Optional[str]) -> Optional[str]:
    """Return an error message for a malformed key, None when it looks usable."""
    if not api_key or not api_key.strip():
        return "API key is required"
    if not api_key.startswith("sk-ant-"):
        return 'API key should start with "sk-ant-"'
    if len(api_key) < 40:
        return "API key appears to be too short"
    return None


def resolve_api_key(user_key: Optional[str]) -> str:
    """Per-user key from settings first, then the server-wide ANTHROPIC_API_KEY."""
    key = (user_key or "").strip() or (os.getenv("ANTHROPIC_API_KEY") or "").strip()
    if not key:
        raise ExtractionError("No API key configured. Add your Claude API key in Settings.")
    return key


# ---- Response parsing ----
def normalize_gender(value: Any) -> Optional[str]:
    if not value:
        return None
    text = str(value).strip().lower()
    text = _GENDER_ALIASES.get(text, text)
    return text if text in GENDERS else None


def normalize_date(value: Any) -> Optional[str]:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value).strip()[:10]).isoformat()
    except ValueError:
        return None


def generate_panel_name(biomarkers: List[Dict[str, Any]]) -> str:
    names = [str(b.get("name") or "").lower() for b in biomarkers]
    categories = [
        label for label, needles in PANEL_RULES
        if any(needle in name for name in names for needle in needles)
    ]
    if not categories:
        return f"Lab Panel ({len(biomarkers)} biomarkers)"
    return " + ".join(categories)


def parse_extraction_response(text: str) -> Tuple[List[Dict[str, str]], Dict[str, Optional[str]], str]:
    """Pull (biomarkers, patient_info, panel_name) out of the model's reply."""
    payload = (text or "").strip()
    fenced = _FENCED.search(payload)
    if fenced:
        payload = fenced.group(1)
    found = _JSON_OBJECT.search(payload)
    if found:
        payload = found.group(0)

    try:
        parsed = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise ExtractionError(
            "Failed to parse biomarker data from API response. "
            "The response may not be in the expected format."
        ) from exc

    if not isinstance(parsed, dict) or not isinstance(parsed.get("biomarkers"), list):
        raise ExtractionError("Invalid response format: missing biomarkers array")

    info = parsed.get("patientInfo") or parsed.get("patient_info") or {}
    if not isinstance(info, dict):
        info = {}
    patient_info = {
        "name": (str(info.get("name")).strip() or None) if info.get("name") else None,
        "date_of_birth": normalize_date(info.get("dateOfBirth") or info.get("date_of_birth")),
        "gender": normalize_gender(info.get("gender")),
        "test_date": normalize_date(info.get("testDate") or info.get("test_date")),
    }

    biomarkers: List[Dict[str, str]] = []
    for item in parsed["biomarkers"]:
        if not isinstance(item, dict):
            continue
        name = str(item.get("name") or "").strip()
        if not name:
            continue
        biomarkers.append({
            "name": name,
            "value": str(item.get("value") if item.get("value") is not None else "").strip(),
            "unit": str(item.get("unit") or "").strip(),
        })

    return biomarkers, patient_info, generate_panel_name(biomarkers)


# ---- API call ----
def build_messages(doc: ProcessedDocument) -> List[Dict[str, Any]]:
    if doc.image_b64 and doc.media_type:
        content: List[Dict[str, Any]] = [
            {"type": "text", "text": EXTRACTION_PROMPT},
            {
                "type": "image",
                "source": {"type": "base64", "media_type": doc.media_type, "data": doc.image_b64},
            },
        ]
        if doc.text.strip():
            content.append({"type": "text", "text": f"OCR text (may contain errors):\n{doc.text}"})
        return [{"role": "user", "content": content}]

    body = f"\n=== {doc.filename} ({doc.page_count} pages) ===\n{doc.text}"
    return [{"role": "user", "content": EXTRACTION_PROMPT + "\n\n" + body}]


def _call_model(api_key: str, doc: ProcessedDocument) -> str:
    client = anthropic.Anthropic(api_key=api_key)
    try:
        message = client.messages.create(
            model=ANTHROPIC_MODEL,
            max_tokens=MAX_TOKENS,
            messages=build_messages(doc),
        )
    except anthropic.AuthenticationError as exc:
        raise ExtractionError("Invalid API key. Please check your Claude API key.") from exc
    except (anthropic.RateLimitError, anthropic.InternalServerError) as exc:
        raise ExtractionError(
            "API rate limit exceeded or service is overloaded. Please try again in a moment."
        ) from exc
    except anthropic.APIError as exc:
        raise ExtractionError(f"Claude API error: {exc}") from exc

    for block in message.content:
        if getattr(block, "type", None) == "text":
            return block.text
    raise ExtractionError("No text response from Claude")


def extract_biomarkers(api_key: str, doc: ProcessedDocument) -> ExtractionResult:
    if not api_key:
        raise ExtractionError("API key is required")
    raw = _call_model(api_key, doc)
    biomarkers, patient_info, panel_name = parse_extraction_response(raw)
    result = ExtractionResult(
        filename=doc.filename,
        biomarkers=biomarkers,
        patient_info=patient_info,
        panel_name=panel_name,
        raw=raw,
    )
    if doc.quality_warning:
        result.warnings.append(doc.quality_warning)
    logger.info({
        "event": "extraction_done",
        "file": doc.filename,
        "biomarkers": len(biomarkers),
        "panel": panel_name,
        "model": ANTHROPIC_MODEL,
    })
    return result


# ---- Multi-file consolidation ----
def _title_case(name: str) -> str:
    return re.sub(r"\b[a-z]", lambda m: m.group(0).upper(), name.lower())


def _most_common(values: List[str]) -> Optional[str]:
    if not values:
        return None
    counts = Counter(values)
    # ties resolve to the value seen first
    best = max(counts.values())
    return next(v for v in values if counts[v] == best)


def consolidate_patient_info(infos: List[Dict[str, Optional[str]]]) -> Dict[str, Any]:
    """Merge patient info from several reports of one person and flag disagreements."""
    names = [i["name"] for i in infos if i.get("name")]
    dobs = [i["date_of_birth"] for i in infos if i.get("date_of_birth")]
    genders = [i["gender"] for i in infos if i.get("gender")]
    test_dates = [i["test_date"] for i in infos if i.get("test_date")]
    discrepancies: List[str] = []

    name = None
    if names:
        keys = [n.lower().strip() for n in names]
        top = _most_common(keys)
        name = _title_case(next(n for n in names if n.lower().strip() == top))
        unique = len(set(keys))
        if unique > 1:
            discrepancies.append(f'Name: Found {unique} variations -> Using "{name}"')

    dob = _most_common(dobs)
    if len(set(dobs)) > 1:
        discrepancies.append(f"Date of Birth: Found {len(set(dobs))} different dates -> Using {dob}")

    test_date = max(test_dates) if test_dates else None
    if len(set(test_dates)) > 1:
        discrepancies.append(
            f"Test Dates: Found {len(set(test_dates))} different dates (multiple lab visits)"
        )

    if len(discrepancies) > 2:
        confidence = "low"
    elif discrepancies:
        confidence = "medium"
    else:
        confidence = "high"

    return {
        "consolidated": {
            "name": name,
            "date_of_birth": dob,
            "gender": _most_common(genders),
            "test_date": test_date,
        },
        "discrepancies": discrepancies,
        "confidence": confidence,
    }


def merge_biomarkers(results: List[ExtractionResult]) -> List[Dict[str, str]]:
    """Combine biomarkers across files; for repeats the most recent test date wins."""
    merged: Dict[str, Dict[str, str]] = {}
    for result in results:
        test_date = result.patient_info.get("test_date")
        for b in result.biomarkers:
            key = b["name"].lower()
            entry = {**b, "test_date": test_date} if test_date else dict(b)
            current = merged.get(key)
            if current is None or (test_date and test_date > (current.get("test_date") or "")):
                merged[key] = entry
    return list(merged.values())


__all__ = [
    "ExtractionError",
    "ExtractionResult",
    "EXTRACTION_PROMPT",
    "validate_api_key",
    "resolve_api_key",
    "parse_extraction_response",
    "generate_panel_name",
    "extract_biomarkers",
    "consolidate_patient_info",
    "merge_biomarkers",
    "build_messages",
]
