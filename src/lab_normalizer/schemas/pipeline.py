from __future__ import annotations
from typing import Any
from pydantic import BaseModel
from lab_normalizer.schemas.lab_report import LabRecord


class OcrResult(BaseModel):
    texts: list[str] = []

    @classmethod
    def from_response(cls, payload: Any) -> OcrResult:
        """Normalize whatever the OCR service sent back into a line list.

        Accepts a flat list of strings, an object with a ``texts`` list, or a
        single string (split on newlines). Anything else yields no lines.
        """
        if payload is None:
            return cls()
        if isinstance(payload, dict):
            payload = payload.get("texts")
        if isinstance(payload, str):
            payload = payload.splitlines()
        if not isinstance(payload, list):
            return cls()
        lines = [str(item) for item in payload if item is not None]
        return cls(texts=[line for line in lines if line.strip()])


class StageResult(BaseModel):
    stage_name: str
    input_summary: str
    output: dict[str, Any]
    reasoning: str
    timing_seconds: float


class PipelineResult(BaseModel):
    source: str
    stages: list[StageResult]
    record: LabRecord
    total_time_seconds: float
    success: bool
    error: str | None = None
