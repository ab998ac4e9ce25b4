from __future__ import annotations

import io
import logging
from pathlib import Path

from PIL import Image, ImageOps

logger = logging.getLogger(__name__)


def convert_pdf_to_images(pdf_path: str | Path) -> list[Image.Image]:
    """Rasterize every page of a PDF report (needs poppler via pdf2image)."""
    from pdf2image import convert_from_path

    source = Path(pdf_path)
    if not source.is_file():
        raise FileNotFoundError(f"PDF not found: {source}")
    pages = convert_from_path(str(source))
    logger.debug("image: %s rasterized to %d pages", source.name, len(pages))
    return [page.convert("RGB") for page in pages]


def load_image(path: str | Path) -> Image.Image:
    """Open a report scan as an upright RGB image.

    PDFs contribute their first page. A missing file raises
    FileNotFoundError and an empty PDF raises ValueError.
    """
    source = Path(path)
    if not source.is_file():
        raise FileNotFoundError(f"Report image not found: {source}")

    if source.suffix.lower() == ".pdf":
        pages = convert_pdf_to_images(source)
        if not pages:
            raise ValueError(f"PDF has no pages: {source}")
        return pages[0]

    with Image.open(source) as opened:
        # Phone photos carry their rotation in EXIF
        upright = ImageOps.exif_transpose(opened)
        return upright.convert("RGB")


def encode_image(image: Image.Image, fmt: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()
