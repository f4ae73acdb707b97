from datetime import date, datetime

from labtrack.services.trends import (
    biomarker_series,
    client_trends,
    common_biomarkers,
    compute_trend,
    leading_float,
)


def _analysis(aid, when, results):
    return {"id": aid, "lab_test_date": when, "analysis_date": None, "results": results}


def _row(name, value, unit="mmol/L"):
    return {"biomarker_name": name, "value": value, "unit": unit}


def test_leading_float():
    assert leading_float("5.4 H") == 5.4
    assert leading_float("N/A") is None
    assert leading_float("positive") is None
    assert leading_float(None) is None


def test_series_sorted_oldest_first_and_skips_non_numeric():
    analyses = [
        _analysis("a3", "2024-03-01", [_row("Fasting Glucose", "5.5")]),
        _analysis("a2", "2024-02-01", [_row("Fasting Glucose", "N/A")]),
        _analysis("a1", "2024-01-01", [_row("Fasting Glucose", "5.0")]),
    ]
    series = biomarker_series(analyses, "Fasting Glucose")
    assert [p["date"] for p in series] == ["2024-01-01", "2024-03-01"]
    assert [p["analysis_id"] for p in series] == ["a1", "a3"]


def test_series_keeps_one_point_per_date():
    analyses = [
        _analysis("a1", "2024-01-01", [_row("Ferritin", "80")]),
        _analysis("a2", "2024-01-01", [_row("Ferritin", "95")]),
    ]
    series = biomarker_series(analyses, "Ferritin")
    assert len(series) == 1
    assert series[0]["value"] == 80.0


def test_series_falls_back_to_analysis_date():
    analyses = [
        {"id": "a1", "lab_test_date": None, "analysis_date": datetime(2024, 5, 2, 10, 0), "results": [_row("TSH", "2.1")]},
    ]
    assert biomarker_series(analyses, "TSH")[0]["date"] == "2024-05-02"


def test_compute_trend_direction_and_percent():
    up = compute_trend([{"date": "2024-01-01", "value": 5.0}, {"date": "2024-03-01", "value": 5.5}])
    assert up["percent_change"] == 10.0
    assert up["direction"] == "up"
    assert up["first"] == 5.0 and up["latest"] == 5.5
    assert [p["x"] for p in up["points"]] == [0.0, 100.0]
    assert [p["y"] for p in up["points"]] == [0.0, 100.0]

    down = compute_trend([{"date": "2024-01-01", "value": 100.0}, {"date": "2024-02-01", "value": 90.0}])
    assert down["direction"] == "down"
    assert down["percent_change"] == -10.0

    flat = compute_trend([{"date": "2024-01-01", "value": 100.0}, {"date": "2024-02-01", "value": 103.0}])
    assert flat["direction"] == "stable"


def test_compute_trend_thresholds_use_unrounded_change():
    just_up = compute_trend([{"date": "2024-01-01", "value": 100.0}, {"date": "2024-02-01", "value": 105.04}])
    assert just_up["direction"] == "up"
    assert just_up["percent_change"] == 5.0

    boundary = compute_trend([{"date": "2024-01-01", "value": 100.0}, {"date": "2024-02-01", "value": 95.0}])
    assert boundary["direction"] == "stable"
    assert boundary["percent_change"] == -5.0


def test_compute_trend_zero_baseline_and_single_point():
    zero = compute_trend([{"date": "2024-01-01", "value": 0.0}, {"date": "2024-02-01", "value": 4.0}])
    assert zero["percent_change"] is None
    assert zero["direction"] == "stable"

    single = compute_trend([{"date": "2024-01-01", "value": 7.0}])
    assert single["points"][0]["x"] == 50.0
    assert single["min"] == single["max"] == 7.0
    assert compute_trend([]) is None


def test_common_biomarkers_needs_two_measurements():
    analyses = [
        _analysis("a1", "2024-01-01", [_row("Ferritin", "80"), _row("TSH", "2.0"), _row("Zinc", "N/A")]),
        _analysis("a2", "2024-02-01", [_row("Ferritin", "85"), _row("TSH", "2.2"), _row("Zinc", "N/A")]),
        _analysis("a3", "2024-03-01", [_row("Ferritin", "90")]),
    ]
    assert common_biomarkers(analyses) == ["Ferritin", "TSH"]
    assert common_biomarkers(analyses, limit=1) == ["Ferritin"]


def test_client_trends_requires_two_analyses():
    out = client_trends([_analysis("a1", date(2024, 1, 1), [_row("Ferritin", "80")])])
    assert out["trends"] == []
    assert "At least 2 analyses" in out["message"]


def test_client_trends_without_shared_biomarkers():
    analyses = [
        _analysis("a1", "2024-01-01", [_row("Ferritin", "80")]),
        _analysis("a2", "2024-02-01", [_row("TSH", "2.0")]),
    ]
    out = client_trends(analyses)
    assert out["trends"] == []
    assert out["message"].startswith("Not enough data")


def test_client_trends_for_named_biomarker():
    analyses = [
        _analysis("a1", "2024-01-01", [_row("Ferritin", "80")]),
        _analysis("a2", "2024-02-01", [_row("Ferritin", "60")]),
    ]
    out = client_trends(analyses, biomarker="Ferritin")
    assert out["message"] is None
    trend = out["trends"][0]
    assert trend["biomarker_name"] == "Ferritin"
    assert trend["data_points"] == 2
    assert trend["trend"]["direction"] == "down"
    assert trend["trend"]["percent_change"] == -25.0
