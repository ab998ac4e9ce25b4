"""Tests for advisory note selection."""

from lab_normalizer.pipeline.notes import note_for
from lab_normalizer.schemas import DEFAULT_TABLES, LabTables
from lab_normalizer.schemas.notes import GENERIC_NOTES, SPECIFIC_NOTES


def test_normal_has_no_note():
    """Normal results never carry a note."""
    for key in DEFAULT_TABLES.names:
        assert note_for(key, "Normal") is None


def test_specific_note_wins():
    """A test-specific note is preferred over the generic one."""
    assert note_for("RDWCV", "High") == SPECIFIC_NOTES["RDWCV"]["High"]
    assert note_for("RDW-CV", "Borderline High") == SPECIFIC_NOTES["RDWCV"]["Borderline High"]
    assert note_for("A1C", "High") == SPECIFIC_NOTES["A1C"]["High"]


def test_generic_note_fallback():
    """Statuses without a specific note fall back to the generic text."""
    assert note_for("HGB", "High") == GENERIC_NOTES["High"]
    assert note_for("WBC", "Borderline High") == GENERIC_NOTES["Borderline High"]
    assert note_for("Vitamin D", "Unknown") == GENERIC_NOTES["Unknown"]


def test_no_note_when_tables_have_none():
    """Tables without a matching note yield None."""
    tables = LabTables(names={"HGB": "Hemoglobin"}, aliases={}, ranges={})
    assert note_for("HGB", "Low", tables=tables) is None
