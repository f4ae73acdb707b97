from labtrack.services.analyzer import (
    MISSING,
    generate_summary,
    match_biomarkers_with_ranges,
    optimal_range_for,
)
from labtrack.services.biomarkers import default_benchmarks

BENCHMARKS = [
    {"name": "Hemoglobin", "male_range": "145-155 g/L", "female_range": "135-145 g/L",
     "units": ["g/L", "g/dL"], "aliases": ["Hgb", "Hb"]},
    {"name": "Ferritin", "male_range": "50-150 µg/L", "female_range": "",
     "units": ["µg/L"], "aliases": []},
    {"name": "Zinc", "male_range": "12-16 µmol/L", "female_range": "12-16 µmol/L",
     "units": ["µmol/L"], "aliases": [], "is_active": False},
]


def test_optimal_range_by_gender():
    assert optimal_range_for(BENCHMARKS[0], "female") == "135-145 g/L"
    assert optimal_range_for(BENCHMARKS[0], "male") == "145-155 g/L"
    # no female range -> male range
    assert optimal_range_for(BENCHMARKS[1], "female") == "50-150 µg/L"


def test_one_row_per_active_benchmark_sorted_by_name():
    rows = match_biomarkers_with_ranges([{"name": "Hgb", "value": "150", "unit": "g/L"}], BENCHMARKS, "male")
    assert [r["biomarker_name"] for r in rows] == ["Ferritin", "Hemoglobin"]
    hgb = rows[1]
    assert hgb["value"] == "150"
    assert hgb["status"] == "in-range"
    ferritin = rows[0]
    assert ferritin["value"] == MISSING
    assert ferritin["unit"] == "µg/L"
    assert ferritin["status"] == "unknown"


def test_first_occurrence_wins():
    extracted = [
        {"name": "Hemoglobin", "value": "130", "unit": "g/L"},
        {"name": "Hb", "value": "150", "unit": "g/L"},
    ]
    rows = match_biomarkers_with_ranges(extracted, BENCHMARKS, "female")
    hgb = next(r for r in rows if r["biomarker_name"] == "Hemoglobin")
    assert hgb["value"] == "130"
    assert hgb["status"] == "out-of-range"


def test_summary_counts():
    rows = match_biomarkers_with_ranges(
        [{"name": "Hemoglobin", "value": "150", "unit": "g/L"},
         {"name": "Ferritin", "value": "300", "unit": "µg/L"}],
        BENCHMARKS,
        "male",
    )
    rows.append({"biomarker_name": "Other", "value": "12", "unit": "", "optimal_range": ""})
    assert generate_summary(rows) == {
        "total_biomarkers": 3,
        "measured_biomarkers": 3,
        "missing_biomarkers": 0,
        "in_range_count": 1,
        "out_of_range_count": 1,
        "unknown_count": 1,
    }


def test_full_catalogue_reports_missing_values():
    catalogue = default_benchmarks()
    rows = match_biomarkers_with_ranges([], catalogue, "male")
    assert len(rows) == len(catalogue)
    summary = generate_summary(rows)
    assert summary["measured_biomarkers"] == 0
    assert summary["missing_biomarkers"] == len(catalogue)
