"""Tests for magnitude correction of OCR-dropped decimal points."""

import math

import pytest
from lab_normalizer.pipeline.correct import correct_stage, fit_to_range, format_value
from lab_normalizer.pipeline.extract import extract_matches


def test_dropped_decimal_is_restored():
    """Values off by a power of ten come back into range."""
    assert fit_to_range("HGB", 134) == 13.4
    assert fit_to_range("WBC", 6200) == 6.2
    assert fit_to_range("PLT", 250000) == 250.0
    assert fit_to_range("GLUCOSE", 950) == 95.0


def test_in_range_value_is_kept():
    """A value already in range is its own best candidate."""
    assert fit_to_range("HGB", 13.4) == 13.4
    assert fit_to_range("WBC", 6.2) == 6.2


def test_candidate_closest_to_midpoint_wins():
    """With several in-range candidates, the one nearest the midpoint wins."""
    # BASOPHILS is 0-1: both 1 and 0.1 are in range, 0.1 is nearer 0.5.
    assert fit_to_range("BASOPHILS", 1) == 0.1


def test_out_of_range_picks_nearest_bound():
    """With no candidate in range, the least out-of-range candidate wins."""
    # HGB is 12-17.5: 20 misses by 2.5, 2 misses by 10.
    assert fit_to_range("HGB", 2) == 20.0


def test_alias_labels_are_resolved():
    """Correction looks the range up through the resolver."""
    assert fit_to_range("Hemoglobin", 134) == 13.4


def test_unknown_or_unranged_key_is_unchanged(tiny_tables):
    """Without a range there is nothing to fit against."""
    assert fit_to_range("Vitamin D", 300) == 300
    assert fit_to_range(None, 42) == 42
    assert fit_to_range("K", 40, tables=tiny_tables) == 40


def test_non_finite_values_are_unchanged():
    """NaN and infinities pass through."""
    assert math.isnan(fit_to_range("HGB", math.nan))
    assert fit_to_range("HGB", math.inf) == math.inf


@pytest.mark.parametrize(
    "key, raw",
    [("HGB", 134), ("WBC", 6200), ("PLT", 250000), ("GLUCOSE", 950), ("TSH", 25)],
)
def test_correction_is_stable(key, raw):
    """Correcting an already corrected value changes nothing."""
    once = fit_to_range(key, raw)
    assert fit_to_range(key, once) == once


def test_supplied_tables_are_used(tiny_tables):
    """Correction reads ranges from the tables it is given."""
    assert fit_to_range("glucose", 950, tables=tiny_tables) == 95.0


def test_format_value():
    """Whole numbers lose their trailing .0."""
    assert format_value(13.4) == "13.4"
    assert format_value(250.0) == "250"
    assert format_value(0.1) == "0.1"


def test_correct_stage_converts_then_fits():
    """The stage converts units before fitting and rounds the result."""
    matches = extract_matches(["Hemoglobin 134 g/dL", "Glucose 5.0 mmol/L"])
    rows, stage = correct_stage(matches)

    by_key = {r.key: r for r in rows}
    assert by_key["HGB"].corrected_value == 13.4
    assert by_key["HGB"].raw_value == "134"
    assert by_key["HGB"].value == 134.0
    assert by_key["GLUCOSE"].corrected_value == pytest.approx(90.08)
    assert by_key["GLUCOSE"].unit == "mg/dL"

    assert stage.stage_name == "correct"
    assert stage.output["changed_count"] == 2
    assert stage.output["corrected"]["HGB"] == 13.4


def test_correct_stage_keeps_reference_range():
    """Rows carry the range they were fitted against."""
    rows, _ = correct_stage(extract_matches(["WBC 6200"]))
    assert rows[0].reference_range.low == 4.0
    assert rows[0].reference_range.high == 11.0
    assert rows[0].unit == "x10^9/L"
