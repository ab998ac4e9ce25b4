from __future__ import annotations

import logging
import math
import time

from lab_normalizer.pipeline.extract import parse_number
from lab_normalizer.pipeline.lookup import convert_to_canonical
from lab_normalizer.pipeline.resolve import resolver_for
from lab_normalizer.schemas.lab_report import ExtractedValue, ResultRow
from lab_normalizer.schemas.pipeline import StageResult
from lab_normalizer.schemas.tables import DEFAULT_TABLES, LabTables

logger = logging.getLogger(__name__)


def _candidates(raw_value: float) -> list[float]:
    # Division keeps 134 / 10 == 13.4 exactly; multiplying by 0.1 would not.
    out = [raw_value, raw_value / 10, raw_value / 100, raw_value / 1000, raw_value * 10]
    return [v for v in out if math.isfinite(v)]


def fit_to_range(label: str | None, raw_value: float, tables: LabTables = DEFAULT_TABLES) -> float:
    """Undo a decimal point lost by OCR, e.g. HGB "134" read for 13.4.

    Among the raw value and its rescalings, prefer the in-range candidate
    closest to the range midpoint; with none in range, the candidate closest
    to the nearest bound. Unknown keys, keys without a range and non-finite
    values come back unchanged.
    """
    if raw_value is None or not math.isfinite(raw_value):
        return raw_value
    key = resolver_for(tables).resolve(label)
    if key is None:
        return raw_value
    ref = tables.ranges.get(key)
    if ref is None:
        return raw_value

    candidates = _candidates(raw_value)
    in_range = [v for v in candidates if ref.low <= v <= ref.high]
    if in_range:
        best = min(in_range, key=lambda v: abs(v - ref.midpoint))
    else:
        best = min(candidates, key=lambda v: _distance_outside(v, ref.low, ref.high))

    if best != raw_value:
        logger.debug("correct: %s %s -> %s (range %s-%s)", key, raw_value, best, ref.low, ref.high)
    return best


def _distance_outside(value: float, low: float, high: float) -> float:
    if value < low:
        return low - value
    if value > high:
        return value - high
    return 0.0


def format_value(value: float) -> str:
    """Render a corrected value for storage: 13.4 -> "13.4", 6200.0 -> "6200"."""
    text = str(value)
    return text[:-2] if text.endswith(".0") else text


def correct_stage(
    matches: list[ExtractedValue],
    round_digits: int = 2,
    tables: LabTables = DEFAULT_TABLES,
) -> tuple[list[ResultRow], StageResult]:
    start = time.time()

    rows: list[ResultRow] = []
    changed: list[str] = []
    for m in matches:
        raw = parse_number(m.raw_value)
        converted, unit = convert_to_canonical(m.key, raw, m.unit, tables)
        fixed = fit_to_range(m.key, converted, tables)
        corrected = round(fixed, round_digits) if math.isfinite(fixed) else None
        if corrected is not None and corrected != raw:
            changed.append(f"{m.key} {m.raw_value}->{format_value(corrected)}")
        rows.append(
            ResultRow(
                key=m.key,
                display_name=tables.names.get(m.key, m.key),
                raw_value=m.raw_value,
                value=raw if math.isfinite(raw) else None,
                corrected_value=corrected,
                unit=unit,
                reference_range=tables.ranges.get(m.key),
            )
        )

    reasoning = (
        f"Corrected {len(changed)}/{len(rows)} values against reference ranges. "
        f"Changes: {'; '.join(changed[:5]) or 'none'}."
    )

    logger.info("correct: %d/%d values rescaled", len(changed), len(rows))

    stage_result = StageResult(
        stage_name="correct",
        input_summary=f"{len(matches)} raw extracted values",
        output={
            "corrected": {
                r.key: r.corrected_value for r in rows if r.corrected_value is not None
            },
            "changed_count": len(changed),
            "changes": changed[:10],
        },
        reasoning=reasoning,
        timing_seconds=time.time() - start,
    )
    return rows, stage_result
