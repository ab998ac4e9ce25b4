"""OCR service client."""

from lab_normalizer.engine.ocr_client import MOCK_OCR_LINES, OcrClient, ocr_stage

__all__ = ["MOCK_OCR_LINES", "OcrClient", "ocr_stage"]
