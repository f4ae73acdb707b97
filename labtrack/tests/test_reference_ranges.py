from labtrack.services.reference_ranges import (
    compare_to_range,
    find_ranges,
    parse_range,
    parse_value,
    value_status,
)

GLUCOSE = "4.44-5.0 mmol/L (80-90 mg/dL)"


def test_find_ranges_reads_every_expression():
    ranges = find_ranges(GLUCOSE)
    assert ranges == [
        {"kind": "between", "lo": 4.44, "hi": 5.0, "unit": "mmol/L"},
        {"kind": "between", "lo": 80.0, "hi": 90.0, "unit": "mg/dL"},
    ]
    assert find_ranges("<5 mg/L") == [{"kind": "lt", "v": 5.0, "unit": "mg/L"}]
    assert find_ranges(">= 60 mL/min")[0]["kind"] == "gte"
    assert find_ranges("see notes") == []


def test_parse_range_prefers_matching_unit():
    assert parse_range(GLUCOSE, "mg/dL")["lo"] == 80.0
    assert parse_range(GLUCOSE, "mg/dl")["lo"] == 80.0
    assert parse_range(GLUCOSE, "nmol/L")["lo"] == 4.44
    assert parse_range(GLUCOSE)["hi"] == 5.0
    assert parse_range("") is None


def test_parse_value():
    assert parse_value("5.4") == 5.4
    assert parse_value("<0.1") == 0.1
    assert parse_value("N/A") is None
    assert parse_value("") is None
    assert parse_value("positive") is None


def test_compare_to_range_bounds():
    between = {"kind": "between", "lo": 1.0, "hi": 2.0}
    assert compare_to_range(0.5, between) == "low"
    assert compare_to_range(1.0, between) == "normal"
    assert compare_to_range(2.5, between) == "high"
    assert compare_to_range(5.0, {"kind": "lt", "v": 5.0}) == "high"
    assert compare_to_range(5.0, {"kind": "lte", "v": 5.0}) == "normal"
    assert compare_to_range(60.0, {"kind": "gt", "v": 60.0}) == "low"
    assert compare_to_range(None, {}) is None


def test_value_status():
    assert value_status("4.8", GLUCOSE, "mmol/L") == "in-range"
    assert value_status("95", GLUCOSE, "mg/dL") == "out-of-range"
    assert value_status("N/A", GLUCOSE, "mmol/L") == "unknown"
    assert value_status("4.8", "not established", "mmol/L") == "unknown"
