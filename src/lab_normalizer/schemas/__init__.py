"""Schema definitions and static tables for lab value normalization."""
from lab_normalizer.schemas.lab_report import (
    ExtractedValue,
    LabRecord,
    RANGE_STATUSES,
    RangeStatus,
    ReferenceRange,
    ResultRow,
    Suggestion,
    TrendPoint,
)
from lab_normalizer.schemas.pipeline import OcrResult, PipelineResult, StageResult
from lab_normalizer.schemas.config import NormalizerConfig
from lab_normalizer.schemas.tables import DEFAULT_TABLES, LabTables

__all__ = [
    "ExtractedValue", "LabRecord", "RANGE_STATUSES", "RangeStatus", "ReferenceRange",
    "ResultRow", "Suggestion", "TrendPoint",
    "OcrResult", "PipelineResult", "StageResult", "NormalizerConfig",
    "DEFAULT_TABLES", "LabTables",
]
