from __future__ import annotations

import logging
import time
from typing import Iterable

from lab_normalizer.engine.ocr_client import OcrClient, ocr_stage
from lab_normalizer.pipeline.correct import correct_stage
from lab_normalizer.pipeline.extract import extract_stage, prepare_text
from lab_normalizer.pipeline.flag import flag_results
from lab_normalizer.pipeline.records import build_record
from lab_normalizer.schemas.config import NormalizerConfig
from lab_normalizer.schemas.lab_report import LabRecord
from lab_normalizer.schemas.pipeline import PipelineResult, StageResult
from lab_normalizer.schemas.tables import DEFAULT_TABLES, LabTables

logger = logging.getLogger(__name__)


def _normalize(
    lines: list[str],
    config: NormalizerConfig,
    tables: LabTables,
    stages: list[StageResult],
) -> LabRecord:
    logger.info("pipeline: extract")
    matches, extract_result = extract_stage(lines, tables)
    stages.append(extract_result)

    logger.info("pipeline: correct")
    rows, correct_result = correct_stage(matches, config.round_digits, tables)
    stages.append(correct_result)

    logger.info("pipeline: flag (borderline=%s%%)", config.borderline_pct)
    flag_result = flag_results(rows, config.borderline_pct, tables)
    stages.append(flag_result)

    return build_record(rows, prepare_text(lines).joined, tables)


def run_lines(
    lines: Iterable[str] | str,
    config: NormalizerConfig,
    tables: LabTables = DEFAULT_TABLES,
    source: str = "<text>",
) -> PipelineResult:
    """Run extract, correct and flag on OCR text already in hand."""
    pipeline_start = time.time()
    stages: list[StageResult] = []

    try:
        text_lines = prepare_text(lines).lines
        record = _normalize(text_lines, config, tables, stages)
        total_time = time.time() - pipeline_start
        logger.info(
            "pipeline: complete in %.2fs - %d values",
            total_time,
            len(record.results),
        )
        return PipelineResult(
            source=source,
            stages=stages,
            record=record,
            total_time_seconds=total_time,
            success=True,
        )
    except Exception as exc:
        logger.error("pipeline: failed - %s", exc)
        return PipelineResult(
            source=source,
            stages=stages,
            record=LabRecord(),
            total_time_seconds=time.time() - pipeline_start,
            success=False,
            error=str(exc),
        )


def run_pipeline(
    image_path: str,
    config: NormalizerConfig,
    tables: LabTables = DEFAULT_TABLES,
    client: OcrClient | None = None,
) -> PipelineResult:
    pipeline_start = time.time()
    stages: list[StageResult] = []

    try:
        client = client or OcrClient(config)

        logger.info("pipeline: ocr %s", image_path)
        ocr_result, ocr_stage_result = ocr_stage(client, image_path)
        stages.append(ocr_stage_result)

        record = _normalize(ocr_result.texts, config, tables, stages)

        total_time = time.time() - pipeline_start
        flag_output = stages[-1].output
        logger.info(
            "pipeline: complete in %.2fs - %d values, %d out of range",
            total_time,
            len(record.results),
            flag_output["abnormal_count"],
        )

        return PipelineResult(
            source=str(image_path),
            stages=stages,
            record=record,
            total_time_seconds=total_time,
            success=True,
        )
    except Exception as exc:
        logger.error("pipeline: failed - %s", exc)
        total_time = time.time() - pipeline_start
        return PipelineResult(
            source=str(image_path),
            stages=stages,
            record=LabRecord(),
            total_time_seconds=total_time,
            success=False,
            error=str(exc),
        )
