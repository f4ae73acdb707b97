"""Per-biomarker history across a client's analyses."""
from __future__ import annotations

import re
from collections import Counter
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

UP_THRESHOLD = 5.0
DOWN_THRESHOLD = -5.0
MIN_ANALYSES = 2

_LEADING_NUMBER = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+))")


def leading_float(value: Any) -> Optional[float]:
    """Numeric prefix of a stored value ("5.4 H" -> 5.4); None for "N/A" and text."""
    if value is None:
        return None
    match = _LEADING_NUMBER.match(str(value))
    return float(match.group(1)) if match else None


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _as_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _measured(result: Dict[str, Any]) -> Optional[float]:
    value = result.get("value")
    if value in (None, "", "N/A"):
        return None
    return leading_float(value)


def biomarker_series(analyses: Iterable[Any], biomarker_name: str) -> List[Dict[str, Any]]:
    """Numeric points for one biomarker, oldest first, one per date (first seen wins)."""
    points: List[Dict[str, Any]] = []
    for analysis in analyses:
        when = _as_date(_field(analysis, "lab_test_date")) or _as_date(_field(analysis, "analysis_date"))
        if when is None:
            continue
        for result in _field(analysis, "results") or []:
            if result.get("biomarker_name") != biomarker_name:
                continue
            number = _measured(result)
            if number is not None:
                points.append({
                    "date": when.isoformat(),
                    "value": number,
                    "unit": result.get("unit") or "",
                    "analysis_id": _field(analysis, "id"),
                })
            break

    points.sort(key=lambda p: p["date"])
    seen = set()
    unique: List[Dict[str, Any]] = []
    for point in points:
        if point["date"] in seen:
            continue
        seen.add(point["date"])
        unique.append(point)
    return unique


def compute_trend(series: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not series:
        return None
    values = [p["value"] for p in series]
    first, latest = values[0], values[-1]
    low, high = min(values), max(values)

    percent_change: Optional[float] = None
    direction = "stable"
    if first != 0:
        change = (latest - first) / first * 100
        if change > UP_THRESHOLD:
            direction = "up"
        elif change < DOWN_THRESHOLD:
            direction = "down"
        percent_change = round(change, 1)

    span = (high - low) or 1
    last_index = len(series) - 1
    chart = [
        {
            "date": p["date"],
            "value": p["value"],
            "x": 50.0 if last_index == 0 else round(i / last_index * 100, 2),
            "y": round((p["value"] - low) / span * 100, 2),
        }
        for i, p in enumerate(series)
    ]
    return {
        "first": first,
        "latest": latest,
        "min": low,
        "max": high,
        "percent_change": percent_change,
        "direction": direction,
        "unit": series[-1].get("unit") or "",
        "points": chart,
    }


def common_biomarkers(analyses: Iterable[Any], limit: Optional[int] = None) -> List[str]:
    """Biomarkers measured in at least two analyses, most frequent first."""
    counts: Counter = Counter()
    for analysis in analyses:
        names = [
            r.get("biomarker_name")
            for r in (_field(analysis, "results") or [])
            if r.get("biomarker_name") and _measured(r) is not None
        ]
        # dict.fromkeys keeps first-seen order so ties rank stably
        counts.update(list(dict.fromkeys(names)))
    ranked = [name for name, count in counts.most_common() if count >= MIN_ANALYSES]
    return ranked[:limit] if limit else ranked


def client_trends(
    analyses: List[Any],
    biomarker: Optional[str] = None,
    limit: Optional[int] = None,
) -> Dict[str, Any]:
    if len(analyses) < MIN_ANALYSES:
        return {"trends": [], "message": "At least 2 analyses are needed to show trends"}

    names = [biomarker] if biomarker else common_biomarkers(analyses, limit)
    if not names:
        return {
            "trends": [],
            "message": "Not enough data to show trends. Need at least 2 analyses with measurable biomarkers.",
        }

    trends = []
    for name in names:
        series = biomarker_series(analyses, name)
        trend = compute_trend(series)
        trends.append({"biomarker_name": name, "data_points": len(series), "trend": trend})
    return {"trends": trends, "message": None}


__all__ = [
    "biomarker_series",
    "compute_trend",
    "common_biomarkers",
    "client_trends",
    "leading_float",
]
