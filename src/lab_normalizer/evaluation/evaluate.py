"""Score pipeline results against hand-annotated expected values."""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Mapping

from lab_normalizer.evaluation.metrics import aggregate_results, score_extraction
from lab_normalizer.schemas.pipeline import PipelineResult

logger = logging.getLogger(__name__)


def load_expected(path: str | Path) -> dict:
    """Read an annotation file.

    The file holds either one key -> value map (for a single report) or a
    map from report file name to such a map. A missing file raises
    FileNotFoundError; anything but a JSON object raises ValueError.
    """
    source = Path(path)
    if not source.is_file():
        raise FileNotFoundError(f"Expected values file not found: {source}")
    data = json.loads(source.read_text())
    if not isinstance(data, dict):
        raise ValueError(f"Expected values must be a JSON object: {source}")
    return data


def _expected_for(result: PipelineResult, expected: Mapping, single: bool) -> Mapping | None:
    per_report = expected.get(Path(result.source).name)
    if isinstance(per_report, Mapping):
        return per_report
    if single and not any(isinstance(v, Mapping) for v in expected.values()):
        return expected
    return None


def evaluate(results: list[PipelineResult], expected: Mapping) -> dict:
    """Score each result's extracted values against its annotation.

    Returns evaluation report as dict with:
    - reports: aggregate batch metrics
    - per_report: one score entry per annotated report
    - mean_f1: average key F1 over annotated reports
    - mean_value_accuracy: average value accuracy over annotated reports
    - scored: number of reports that had an annotation
    """
    single = len(results) == 1
    per_report = []

    for result in results:
        gold = _expected_for(result, expected, single)
        if gold is None:
            logger.warning("evaluate: no expected values for %s", result.source)
            continue
        scores = score_extraction(result.record.extracted_values, gold)
        per_report.append({"source": result.source, **scores})
        logger.info(
            "evaluate: %s f1=%.2f value_accuracy=%.2f",
            result.source,
            scores["keys"]["f1"],
            scores["value_accuracy"],
        )

    scored = len(per_report)
    return {
        "reports": aggregate_results(results),
        "per_report": per_report,
        "mean_f1": sum(s["keys"]["f1"] for s in per_report) / scored if scored else 0.0,
        "mean_value_accuracy": (
            sum(s["value_accuracy"] for s in per_report) / scored if scored else 0.0
        ),
        "scored": scored,
    }
