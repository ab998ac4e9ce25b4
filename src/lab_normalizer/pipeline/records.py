"""Assemble result records and re-read stored ones.

Stored records only carry canonical key -> value maps. Status, unit and note
are always recomputed here from the current tables, so a change to a
reference range reclassifies old results too. Records written before a key
was canonical are re-resolved on read, best-effort.
"""
from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Iterable, Mapping

from lab_normalizer.pipeline.correct import fit_to_range, format_value
from lab_normalizer.pipeline.extract import parse_number
from lab_normalizer.pipeline.flag import DEFAULT_BORDERLINE_PCT, classify_status
from lab_normalizer.pipeline.lookup import unit_for
from lab_normalizer.pipeline.notes import note_for
from lab_normalizer.pipeline.resolve import resolver_for
from lab_normalizer.pipeline.suggest import detect_keys, suggest_test_name
from lab_normalizer.schemas.lab_report import LabRecord, ResultRow, TrendPoint
from lab_normalizer.schemas.tables import DEFAULT_TABLES, LabTables

logger = logging.getLogger(__name__)


def build_record(
    rows: list[ResultRow],
    text: str = "",
    tables: LabTables = DEFAULT_TABLES,
) -> LabRecord:
    """Wrap corrected and flagged rows into the record handed to storage/UI."""
    extracted = {
        r.key: format_value(r.corrected_value) if r.corrected_value is not None else r.raw_value
        for r in rows
    }
    found_keys = detect_keys(text, tables)
    suggestion = suggest_test_name(found_keys, extracted, text)

    return LabRecord(
        name=suggestion.name if suggestion else None,
        category=suggestion.category if suggestion else None,
        suggestions=found_keys,
        raw_values={r.key: r.raw_value for r in rows},
        extracted_values=extracted,
        results=rows,
    )


def normalize_stored_values(
    values: Mapping[str, object] | None,
    tables: LabTables = DEFAULT_TABLES,
) -> dict[str, object]:
    """Re-key a stored value map onto canonical keys.

    Keys that do not resolve keep their normalized spelling. When two stored
    keys resolve to the same canonical key, the first one wins.
    """
    out: dict[str, object] = {}
    if not values:
        return out
    resolver = resolver_for(tables)
    for raw_key, value in values.items():
        key = resolver.resolve_or_normalize(raw_key)
        if not key:
            continue
        if key in out:
            logger.debug("records: dropping duplicate %r for %s", raw_key, key)
            continue
        out[key] = value
    return out


def summarize_values(
    values: Mapping[str, object] | None,
    borderline_pct: float = DEFAULT_BORDERLINE_PCT,
    tables: LabTables = DEFAULT_TABLES,
) -> list[ResultRow]:
    """Recompute display rows for a stored (possibly legacy) value map."""
    rows: list[ResultRow] = []
    if not values:
        return rows
    resolver = resolver_for(tables)
    for raw_key, raw_value in values.items():
        key = resolver.resolve_or_normalize(raw_key)
        ref = tables.ranges.get(key)
        number = parse_number(raw_value)
        finite = math.isfinite(number)
        fixed = fit_to_range(key, number, tables) if finite and ref else number

        if finite and ref:
            status = classify_status(key, fixed, borderline_pct, tables)
        else:
            status = "Unknown"

        rows.append(
            ResultRow(
                key=key or str(raw_key),
                display_name=tables.names.get(key, str(raw_key)),
                original_key=str(raw_key),
                raw_value=str(raw_value),
                value=number if finite else None,
                corrected_value=fixed if finite else None,
                unit=unit_for(key, tables),
                reference_range=ref,
                status=status,
                note=note_for(key, status, tables),
            )
        )
    return rows


def _as_date(value: object) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            return None
    return None


def pick_value(
    values: Mapping[str, object] | None,
    key: str,
    tables: LabTables = DEFAULT_TABLES,
) -> float | None:
    """First numeric value in a stored map whose key resolves to ``key``."""
    if not values:
        return None
    resolver = resolver_for(tables)
    for raw_key, raw_value in values.items():
        if resolver.resolve_or_normalize(raw_key) == key:
            number = parse_number(raw_value)
            return number if math.isfinite(number) else None
    return None


def trend_points(
    history: Iterable[tuple[object, Mapping[str, object]]],
    label: str,
    borderline_pct: float = DEFAULT_BORDERLINE_PCT,
    tables: LabTables = DEFAULT_TABLES,
) -> list[TrendPoint]:
    """Chart series for one test across stored records.

    ``history`` holds ``(date, values)`` pairs. Entries without a usable
    date or value are skipped, values are magnitude-corrected when the test
    has a range, and only the last entry of each calendar day is kept.
    """
    key = resolver_for(tables).resolve_or_normalize(label)
    ref = tables.ranges.get(key)

    points: list[tuple[date, float]] = []
    for when, values in history:
        day = _as_date(when)
        if day is None:
            continue
        raw = pick_value(values, key, tables)
        if raw is None:
            continue
        points.append((day, fit_to_range(key, raw, tables) if ref else raw))

    points.sort(key=lambda p: p[0])
    compacted: list[tuple[date, float]] = []
    for day, value in points:
        if compacted and compacted[-1][0] == day:
            compacted[-1] = (day, value)
        else:
            compacted.append((day, value))

    return [
        TrendPoint(
            date=day.isoformat(),
            value=value,
            status=classify_status(key, value, borderline_pct, tables) if ref else "Unknown",
        )
        for day, value in compacted
    ]
