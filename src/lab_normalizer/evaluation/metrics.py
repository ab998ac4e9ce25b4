"""Evaluation metrics for OCR value extraction."""

from __future__ import annotations
import logging
import math
from typing import Mapping

from lab_normalizer.pipeline.extract import parse_number
from lab_normalizer.pipeline.resolve import normalize_label
from lab_normalizer.schemas.pipeline import PipelineResult

logger = logging.getLogger(__name__)

VALUE_TOLERANCE = 0.05


def _values_match(predicted: object, expected: object) -> bool:
    pv = parse_number(predicted)
    gv = parse_number(expected)
    if not (math.isfinite(pv) and math.isfinite(gv)):
        return str(predicted).strip() == str(expected).strip()
    if gv == 0:
        return pv == 0
    return abs(pv - gv) / abs(gv) <= VALUE_TOLERANCE


def score_extraction(
    predicted: Mapping[str, object], expected: Mapping[str, object]
) -> dict:
    """Key-level precision, recall, F1 and value accuracy of an extraction.

    ``expected`` is a hand-annotated key -> value map for the same report.
    Keys are compared after normalization; values match within 5% relative
    tolerance when numeric, exactly otherwise.
    """
    pred = {normalize_label(k): v for k, v in predicted.items()}
    gold = {normalize_label(k): v for k, v in expected.items()}

    pred_keys = set(pred)
    gold_keys = set(gold)
    matched = pred_keys & gold_keys

    tp = len(matched)
    fp = len(pred_keys - gold_keys)
    fn = len(gold_keys - pred_keys)

    precision = tp / (tp + fp) if (tp + fp) > 0 else 0.0
    recall = tp / (tp + fn) if (tp + fn) > 0 else 0.0
    f1 = (
        2 * precision * recall / (precision + recall)
        if (precision + recall) > 0
        else 0.0
    )

    value_matches = sum(1 for k in matched if _values_match(pred[k], gold[k]))
    value_accuracy = value_matches / len(matched) if matched else 0.0

    return {
        "keys": {"precision": precision, "recall": recall, "f1": f1},
        "value_accuracy": value_accuracy,
        "predicted_count": len(pred_keys),
        "expected_count": len(gold_keys),
        "matched_count": len(matched),
        "missing": sorted(gold_keys - pred_keys),
        "unexpected": sorted(pred_keys - gold_keys),
    }


def aggregate_results(results: list[PipelineResult]) -> dict:
    """Aggregate metrics across a batch of pipeline results.

    Returns:
    - success_rate: fraction of runs that completed
    - avg_values_extracted: average number of values per report
    - avg_pipeline_time: average total pipeline time in seconds
    - reports_with_values: fraction of reports with at least 1 value
    - abnormal_rate: fraction of all values flagged Low or High
    """
    if not results:
        return {
            "success_rate": 0.0,
            "avg_values_extracted": 0.0,
            "avg_pipeline_time": 0.0,
            "reports_with_values": 0.0,
            "abnormal_rate": 0.0,
            "total_reports": 0,
        }

    n = len(results)
    successes = sum(1 for r in results if r.success)
    all_rows = [row for r in results for row in r.record.results]
    total_time = sum(r.total_time_seconds for r in results)
    with_values = sum(1 for r in results if r.record.results)
    abnormal = sum(1 for row in all_rows if row.status in ("Low", "High"))

    return {
        "success_rate": successes / n,
        "avg_values_extracted": len(all_rows) / n,
        "avg_pipeline_time": total_time / n,
        "reports_with_values": with_values / n,
        "abnormal_rate": abnormal / len(all_rows) if all_rows else 0.0,
        "total_reports": n,
    }
