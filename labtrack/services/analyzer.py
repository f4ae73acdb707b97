"""Line extracted biomarkers up against benchmark ranges and summarise the result."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from labtrack.services.biomarkers import match_key
from labtrack.services.reference_ranges import value_status

MISSING = "N/A"


def optimal_range_for(benchmark: Dict[str, Any], gender: Optional[str]) -> str:
    if gender == "female" and benchmark.get("female_range"):
        return benchmark["female_range"]
    return benchmark.get("male_range") or ""


def match_biomarkers_with_ranges(
    extracted: Iterable[Dict[str, Any]],
    benchmarks: Iterable[Dict[str, Any]],
    gender: Optional[str] = "male",
) -> List[Dict[str, Any]]:
    """One result row per benchmark, ``"N/A"`` where the report had no value.

    Extracted names are matched on the benchmark name or any alias; when the
    same biomarker appears twice the first occurrence wins.
    """
    by_key: Dict[str, Dict[str, Any]] = {}
    for item in extracted:
        key = match_key(str(item.get("name") or ""))
        if key and key not in by_key:
            by_key[key] = item

    results: List[Dict[str, Any]] = []
    for benchmark in benchmarks:
        if benchmark.get("is_active") is False:
            continue
        found = None
        for candidate in [benchmark["name"], *(benchmark.get("aliases") or [])]:
            found = by_key.get(match_key(candidate))
            if found:
                break

        optimal = optimal_range_for(benchmark, gender)
        if found:
            value = str(found.get("value") or "").strip() or MISSING
            unit = str(found.get("unit") or "").strip()
            test_date = found.get("test_date")
        else:
            units = benchmark.get("units") or []
            value, unit, test_date = MISSING, (units[0] if units else ""), None

        results.append({
            "biomarker_name": benchmark["name"],
            "value": value,
            "unit": unit,
            "optimal_range": optimal,
            "test_date": test_date,
            "status": value_status(value, optimal, unit) if value != MISSING else "unknown",
        })

    results.sort(key=lambda r: r["biomarker_name"].lower())
    return results


def generate_summary(results: Iterable[Dict[str, Any]]) -> Dict[str, int]:
    total = measured = in_range = out_of_range = unknown = 0
    for r in results:
        total += 1
        value = r.get("value")
        if value == MISSING or value in (None, ""):
            unknown += 1
            continue
        measured += 1
        status = value_status(value, r.get("optimal_range") or "", r.get("unit"))
        if status == "in-range":
            in_range += 1
        elif status == "out-of-range":
            out_of_range += 1
        else:
            unknown += 1
    return {
        "total_biomarkers": total,
        "measured_biomarkers": measured,
        "missing_biomarkers": total - measured,
        "in_range_count": in_range,
        "out_of_range_count": out_of_range,
        "unknown_count": unknown,
    }


__all__ = ["match_biomarkers_with_ranges", "generate_summary", "optimal_range_for", "MISSING"]
