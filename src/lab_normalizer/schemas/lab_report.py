from __future__ import annotations
from typing import Literal
from pydantic import BaseModel, model_validator


RangeStatus = Literal[
    "Low", "Borderline Low", "Normal", "Borderline High", "High", "Unknown"
]

RANGE_STATUSES: tuple[str, ...] = (
    "Low",
    "Borderline Low",
    "Normal",
    "Borderline High",
    "High",
    "Unknown",
)


class ReferenceRange(BaseModel):
    low: float
    high: float
    unit: str = ""  # Canonical display unit, e.g. "g/dL"

    @model_validator(mode="after")
    def _check_bounds(self) -> ReferenceRange:
        if not self.low < self.high:
            raise ValueError(f"reference range low ({self.low}) must be below high ({self.high})")
        return self

    @property
    def midpoint(self) -> float:
        return (self.low + self.high) / 2


class ExtractedValue(BaseModel):
    key: str  # Canonical key, e.g. "HGB"
    raw_value: str  # Numeric string exactly as read, e.g. "134"
    label: str  # Label text as captured, e.g. "HB"
    unit: str | None = None  # Raw unit token following the value, if any
    pattern: str  # Name of the pattern that produced the match
    source: Literal["joined", "line", "generic"] = "joined"


class Suggestion(BaseModel):
    name: str
    category: str | None = None
    description: str | None = None


class ResultRow(BaseModel):
    key: str
    display_name: str
    original_key: str | None = None  # Key as stored, before re-resolution
    raw_value: str
    value: float | None = None  # Parsed raw value
    corrected_value: float | None = None  # After magnitude correction
    unit: str = ""
    reference_range: ReferenceRange | None = None
    status: RangeStatus = "Unknown"
    note: str | None = None


class LabRecord(BaseModel):
    name: str | None = None
    category: str | None = None
    suggestions: list[str] = []
    raw_values: dict[str, str] = {}
    extracted_values: dict[str, str] = {}
    results: list[ResultRow] = []

    @property
    def status_map(self) -> dict[str, str]:
        return {r.key: r.status for r in self.results}

    @property
    def units_map(self) -> dict[str, str]:
        return {r.key: r.unit for r in self.results if r.unit}

    @property
    def notes_map(self) -> dict[str, str]:
        return {r.key: r.note for r in self.results if r.note}

    def storage_payload(self) -> dict[str, object]:
        """Map handed to the storage collaborator.

        Statuses and notes are left out on purpose: they are recomputed from
        the stored values and the current tables whenever a record is read.
        """
        return {
            "name": self.name,
            "category": self.category,
            "suggestions": list(self.suggestions),
            "extractedValues": dict(self.extracted_values),
            "unitsMap": self.units_map,
        }


class TrendPoint(BaseModel):
    date: str  # ISO date, YYYY-MM-DD
    value: float
    status: RangeStatus = "Unknown"
