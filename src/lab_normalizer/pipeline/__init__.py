"""Normalization stages: resolve, look up, extract, correct, flag."""

from lab_normalizer.pipeline.correct import fit_to_range
from lab_normalizer.pipeline.extract import extract_matches, extract_values, parse_number
from lab_normalizer.pipeline.flag import classify_status
from lab_normalizer.pipeline.lookup import (
    convert_to_canonical,
    normalize_raw_unit,
    range_for,
    unit_for,
)
from lab_normalizer.pipeline.notes import note_for
from lab_normalizer.pipeline.resolve import KeyResolver, normalize_label, resolve_key

__all__ = [
    "fit_to_range", "extract_matches", "extract_values", "parse_number",
    "classify_status", "convert_to_canonical", "normalize_raw_unit", "range_for",
    "unit_for", "note_for", "KeyResolver", "normalize_label", "resolve_key",
]
