from __future__ import annotations

import logging
import time
from pathlib import Path

import requests
from pdf2image.exceptions import (
    PDFInfoNotInstalledError,
    PDFPageCountError,
    PDFPopplerTimeoutError,
    PDFSyntaxError,
)
from PIL import Image

from lab_normalizer.preprocessing.image_ops import encode_image, load_image
from lab_normalizer.schemas.config import NormalizerConfig
from lab_normalizer.schemas.pipeline import OcrResult, StageResult

logger = logging.getLogger(__name__)

# Deterministic lines returned in dry-run mode: a photographed CBC with the
# usual OCR damage (dropped decimal points, verbose labels, loose spacing).
MOCK_OCR_LINES = [
    "CITY MEDICAL LABORATORY",
    "COMPLETE BLOOD COUNT (CBC)",
    "Hemoglobin (HB) 134 g/dL 12.0 - 17.5",
    "Total Count (WBC) 6200 /cumm",
    "RBC Count 4.8 million/cmm",
    "HCT 41.2 %",
    "MCV 86 fL",
    "MCH 28.9 pg",
    "MCHC 33.5 g/dL",
    "RDW-CV 15.8 %",
    "Platelet Count 250000 /cumm",
    "Neutrophils 62 %",
    "Lymphocytes 30 %",
    "Monocytes 5 %",
    "Eosinophils 2 %",
    "Basophils 1 %",
]


class OcrClient:
    """Client for the text-extraction service.

    In dry_run mode: no request is made, canned report lines are returned.
    In normal mode: the image is posted as multipart field ``image`` to
    ``config.ocr_url`` and the JSON reply is normalized to an OcrResult.
    Any transport, decoding or image error yields an empty OcrResult.
    """

    def __init__(self, config: NormalizerConfig, session: requests.Session | None = None) -> None:
        self.config = config
        self.session = session

    def extract_lines(self, image_path: str | Path) -> OcrResult:
        if self.config.dry_run:
            return OcrResult(texts=list(MOCK_OCR_LINES))

        path = Path(image_path)
        try:
            payload = encode_image(load_image(path))
            post = self.session.post if self.session is not None else requests.post
            response = post(
                self.config.ocr_url,
                files={"image": (f"{path.stem}.png", payload, "image/png")},
                timeout=self.config.ocr_timeout,
            )
            response.raise_for_status()
            result = OcrResult.from_response(response.json())
        except (
            requests.RequestException,
            ValueError,
            OSError,
            PDFInfoNotInstalledError,
            PDFPageCountError,
            PDFSyntaxError,
            PDFPopplerTimeoutError,
            Image.DecompressionBombError,
        ) as exc:
            logger.warning("ocr: request for %s failed - %s", path.name, exc)
            return OcrResult()

        logger.info("ocr: %d lines from %s", len(result.texts), path.name)
        return result


def ocr_stage(client: OcrClient, image_path: str | Path) -> tuple[OcrResult, StageResult]:
    start = time.time()

    result = client.extract_lines(image_path)
    source = "dry-run mock" if client.config.dry_run else client.config.ocr_url

    reasoning = f"Received {len(result.texts)} text lines from {source}."
    if not result.texts:
        reasoning += " No text: OCR failed or the image is blank; downstream stages run on empty input."

    stage_result = StageResult(
        stage_name="ocr",
        input_summary=f"Image {Path(image_path).name}",
        output={"line_count": len(result.texts), "lines": result.texts},
        reasoning=reasoning,
        timing_seconds=time.time() - start,
    )
    return result, stage_result
