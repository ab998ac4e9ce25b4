"""Normalize OCR-extracted lab values onto a canonical test vocabulary."""

from lab_normalizer.pipeline import (
    KeyResolver,
    classify_status,
    convert_to_canonical,
    extract_matches,
    extract_values,
    fit_to_range,
    normalize_label,
    note_for,
    parse_number,
    range_for,
    resolve_key,
    unit_for,
)
from lab_normalizer.schemas import DEFAULT_TABLES, LabTables, NormalizerConfig

__version__ = "0.1.0"

__all__ = [
    "KeyResolver", "classify_status", "convert_to_canonical", "extract_matches",
    "extract_values", "fit_to_range", "normalize_label", "note_for", "parse_number",
    "range_for", "resolve_key", "unit_for",
    "DEFAULT_TABLES", "LabTables", "NormalizerConfig",
]
