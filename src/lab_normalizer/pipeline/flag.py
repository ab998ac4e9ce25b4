from __future__ import annotations

import logging
import math
import time

from lab_normalizer.pipeline.notes import note_for
from lab_normalizer.pipeline.resolve import resolver_for
from lab_normalizer.schemas.lab_report import RangeStatus, ResultRow
from lab_normalizer.schemas.pipeline import StageResult
from lab_normalizer.schemas.tables import DEFAULT_TABLES, LabTables

logger = logging.getLogger(__name__)

DEFAULT_BORDERLINE_PCT = 5.0


def classify_status(
    label: str | None,
    value: float | None,
    borderline_pct: float = DEFAULT_BORDERLINE_PCT,
    tables: LabTables = DEFAULT_TABLES,
) -> RangeStatus:
    """Place a value in one of the clinical status bands.

    Outside the range is always plain Low/High. Inside it, the outer
    ``borderline_pct`` percent of the range width on each side is a
    borderline band; when both bands cover a value, Borderline Low wins.
    """
    if value is None or not math.isfinite(value):
        return "Unknown"
    key = resolver_for(tables).resolve_or_normalize(label)
    ref = tables.ranges.get(key)
    if ref is None:
        return "Unknown"

    if value < ref.low:
        return "Low"
    if value > ref.high:
        return "High"

    pct = max(0.0, borderline_pct if borderline_pct is not None else DEFAULT_BORDERLINE_PCT)
    band = (ref.high - ref.low) * (pct / 100)

    if value <= ref.low + band:
        return "Borderline Low"
    if value >= ref.high - band:
        return "Borderline High"
    return "Normal"


def flag_results(
    rows: list[ResultRow],
    borderline_pct: float = DEFAULT_BORDERLINE_PCT,
    tables: LabTables = DEFAULT_TABLES,
) -> StageResult:
    start = time.time()

    counts: dict[str, int] = {}
    reasoning_parts: list[str] = []

    for row in rows:
        status = classify_status(row.key, row.corrected_value, borderline_pct, tables)
        row.status = status
        row.note = note_for(row.key, status, tables)
        counts[status] = counts.get(status, 0) + 1

        ref = row.reference_range
        if ref is None:
            reasoning_parts.append(f"{row.key}: no reference range available")
        else:
            reasoning_parts.append(
                f"{row.key}={row.corrected_value}: {status} (ref {ref.low}-{ref.high})"
            )

    abnormal = counts.get("Low", 0) + counts.get("High", 0)
    borderline = counts.get("Borderline Low", 0) + counts.get("Borderline High", 0)

    reasoning = (
        f"Classified {len(rows)} values with a {borderline_pct:g}% borderline band: "
        f"{abnormal} out of range, {borderline} borderline. "
        f"Details: {'; '.join(reasoning_parts[:5])}"
    )

    logger.info(
        "flag: %d/%d out of range, %d borderline",
        abnormal,
        len(rows),
        borderline,
    )

    return StageResult(
        stage_name="flag",
        input_summary=f"{len(rows)} corrected values",
        output={
            "abnormal_count": abnormal,
            "borderline_count": borderline,
            "total_values": len(rows),
            "status_counts": counts,
            "flags": [
                {"key": r.key, "value": r.corrected_value, "status": r.status}
                for r in rows
                if r.status != "Normal"
            ],
        },
        reasoning=reasoning,
        timing_seconds=time.time() - start,
    )
