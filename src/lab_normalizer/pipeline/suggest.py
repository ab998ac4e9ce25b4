from __future__ import annotations

import re
from typing import Mapping, Sequence

from lab_normalizer.pipeline.resolve import normalize_label
from lab_normalizer.schemas.lab_report import Suggestion
from lab_normalizer.schemas.tables import DEFAULT_TABLES, LabTables

CBC_CORE_KEYS = ("RBC", "WBC", "HGB", "HCT", "MCV", "MCH", "MCHC", "RDWCV", "PLT")
CBC_MIN_CORE_HITS = 4

_CBC_SUGGESTION = Suggestion(
    name="CBC", category="Blood", description="Complete blood count."
)


def detect_keys(text: str, tables: LabTables = DEFAULT_TABLES) -> list[str]:
    """Canonical keys that appear verbatim in the uppercased report text."""
    upper = (text or "").upper()
    return [key for key in tables.names if key in upper]


def count_occurrences(text_upper: str, key: str) -> int:
    k = normalize_label(key)
    if not k:
        return 0
    return len(re.findall(rf"\b{re.escape(k)}\b", text_upper))


def suggest_test_name(
    found_keys: Sequence[str],
    values: Mapping[str, object],
    text: str,
) -> Suggestion | None:
    """Suggest a name for the whole report.

    A report that says CBC, or carries values for enough CBC core tests, is
    a CBC. Otherwise the detected key with the best score is used: 3 points
    for having a value, one per whole-word mention, half a point for keys of
    four letters or more. Ties go to the first key found.
    """
    text_upper = (text or "").upper()
    core_hits = sum(1 for k in CBC_CORE_KEYS if values.get(k))
    if re.search(r"\bCBC\b", text_upper) or core_hits >= CBC_MIN_CORE_HITS:
        return _CBC_SUGGESTION.model_copy()

    best: str | None = None
    best_score = float("-inf")
    for key in found_keys:
        score = 0.0
        if values.get(key):
            score += 3
        score += count_occurrences(text_upper, key)
        if len(key) >= 4:
            score += 0.5
        if score > best_score:
            best_score = score
            best = key

    return Suggestion(name=best) if best else None
