"""Match extracted patient details against a practitioner's existing clients."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence

logger = logging.getLogger("labtrack")

HIGH_CONFIDENCE = 0.85
MEDIUM_CONFIDENCE = 0.65

_NON_ALPHA = re.compile(r"[^a-z\s]")
_SPACES = re.compile(r"\s+")


class ClientMatchError(ValueError):
    """Raised when a client cannot be created from extracted patient info."""


@dataclass
class PatientInfo:
    name: Optional[str] = None
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None
    test_date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PatientInfo":
        data = data or {}
        return cls(
            name=data.get("name") or None,
            date_of_birth=data.get("date_of_birth") or None,
            gender=data.get("gender") or None,
            test_date=data.get("test_date") or None,
        )


@dataclass
class ClientMatchResult:
    matched: bool
    client: Any
    confidence: str
    needs_confirmation: bool
    suggested_action: str
    score: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matched": self.matched,
            "client_id": getattr(self.client, "id", None),
            "confidence": self.confidence,
            "needs_confirmation": self.needs_confirmation,
            "suggested_action": self.suggested_action,
            "score": round(self.score, 3),
        }


def normalize_name(name: str) -> str:
    """Lowercase, letters only, words sorted so "Last, First" equals "First Last"."""
    cleaned = _NON_ALPHA.sub("", (name or "").lower())
    cleaned = _SPACES.sub(" ", cleaned).strip()
    return " ".join(sorted(cleaned.split(" ")))


def levenshtein_distance(a: str, b: str) -> int:
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def name_similarity(first: str, second: str) -> float:
    s1 = normalize_name(first)
    s2 = normalize_name(second)
    if s1 == s2:
        return 1.0
    longest = max(len(s1), len(s2))
    if longest == 0:
        return 0.0
    return 1 - levenshtein_distance(s1, s2) / longest


def _as_iso(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def score_client(client: Any, info: PatientInfo) -> float:
    """Return matched points / possible points for one client (0 when nothing comparable)."""
    score = 0
    max_score = 0

    if info.name:
        max_score += 3
        similarity = name_similarity(info.name, getattr(client, "full_name", "") or "")
        if similarity >= 0.9:
            score += 3
        elif similarity >= 0.7:
            score += 2
        elif similarity >= 0.5:
            score += 1

    client_dob = _as_iso(getattr(client, "date_of_birth", None))
    if info.date_of_birth and client_dob:
        max_score += 3
        if _as_iso(info.date_of_birth) == client_dob:
            score += 3

    client_gender = getattr(client, "gender", None)
    if info.gender and client_gender:
        max_score += 1
        if info.gender == client_gender:
            score += 1

    return score / max_score if max_score > 0 else 0.0


def find_best_match(clients: Sequence[Any], info: PatientInfo) -> Optional[ClientMatchResult]:
    best_client = None
    best_score = 0.0
    for client in clients:
        score = score_client(client, info)
        # strict comparison: on a tie the earlier client stays
        if score > best_score:
            best_client, best_score = client, score

    if best_client is None:
        return None
    if best_score >= HIGH_CONFIDENCE:
        return ClientMatchResult(True, best_client, "high", False, "use-existing", best_score)
    if best_score >= MEDIUM_CONFIDENCE:
        return ClientMatchResult(True, best_client, "medium", True, "use-existing", best_score)
    return None


def match_client(info: PatientInfo, clients: Iterable[Any]) -> ClientMatchResult:
    """Decide whether the extracted patient is an existing client or a new one.

    ``clients`` should be every client of the user (active and past), newest first.
    """
    if not info.name and not info.date_of_birth:
        result = ClientMatchResult(False, None, "low", True, "manual-select")
    else:
        candidates: List[Any] = list(clients)
        match = find_best_match(candidates, info) if candidates else None
        result = match or ClientMatchResult(False, None, "high", True, "create-new")

    logger.info({
        "event": "client_match",
        "confidence": result.confidence,
        "suggested_action": result.suggested_action,
        "client_id": getattr(result.client, "id", None),
        "score": round(result.score, 3),
    })
    return result


def new_client_fields(info: PatientInfo) -> Dict[str, Any]:
    """Column values for a client auto-created from a lab report."""
    if not info.name:
        raise ClientMatchError("Patient name is required to create a client")
    return {
        "full_name": info.name,
        "date_of_birth": info.date_of_birth or None,
        "gender": info.gender or None,
        "email": None,
        "status": "active",
        "notes": "Auto-created from lab report",
        "tags": [],
    }


__all__ = [
    "PatientInfo",
    "ClientMatchResult",
    "ClientMatchError",
    "match_client",
    "find_best_match",
    "score_client",
    "name_similarity",
    "normalize_name",
    "levenshtein_distance",
    "new_client_fields",
]
