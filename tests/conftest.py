"""Shared pytest fixtures for lab_normalizer tests."""

import pytest
from PIL import Image
from lab_normalizer.engine.ocr_client import MOCK_OCR_LINES
from lab_normalizer.schemas import LabTables, NormalizerConfig, ReferenceRange


@pytest.fixture
def dry_run_config() -> NormalizerConfig:
    """NormalizerConfig with dry_run=True (no OCR service needed)."""
    return NormalizerConfig(dry_run=True)


@pytest.fixture
def cbc_lines() -> list[str]:
    """OCR lines of a photographed CBC report (the dry-run mock)."""
    return list(MOCK_OCR_LINES)


@pytest.fixture
def sample_image_path(tmp_path) -> str:
    """Path to a small white PNG on disk."""
    path = tmp_path / "report.png"
    Image.new("RGB", (200, 100), "white").save(path)
    return str(path)


@pytest.fixture
def tiny_tables() -> LabTables:
    """A three-test vocabulary standing in for the default tables."""
    return LabTables(
        names={"GLU": "Glucose", "NA": "Sodium", "K": "Potassium"},
        aliases={"GLUCOSE": "GLU", "SODIUM": "NA"},
        ranges={
            "GLU": ReferenceRange(low=70, high=99, unit="mg/dL"),
            "NA": ReferenceRange(low=136, high=145, unit="mmol/L"),
        },
        display_units={"GLU": "mg/dL", "NA": "mmol/L"},
        generic_notes={"High": "Above range."},
    )
