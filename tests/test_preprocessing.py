"""Tests for image loading and encoding."""

import io

import pytest
from PIL import Image
from lab_normalizer.preprocessing import convert_pdf_to_images, encode_image, load_image


def test_load_image_raises_for_missing_file():
    """load_image raises FileNotFoundError for nonexistent path."""
    with pytest.raises(FileNotFoundError):
        load_image("/nonexistent/path/image.png")


def test_load_image_valid_png(sample_image_path):
    """load_image returns RGB PIL Image for valid PNG."""
    img = load_image(sample_image_path)
    assert isinstance(img, Image.Image)
    assert img.mode == "RGB"
    assert img.size == (200, 100)


def test_load_image_converts_to_rgb(tmp_path):
    """Images with alpha or palette modes come back as RGB."""
    path = tmp_path / "alpha.png"
    Image.new("RGBA", (50, 40), (255, 0, 0, 128)).save(path)
    assert load_image(path).mode == "RGB"


def test_convert_pdf_raises_for_missing_file():
    """convert_pdf_to_images raises FileNotFoundError for nonexistent path."""
    with pytest.raises(FileNotFoundError):
        convert_pdf_to_images("/nonexistent/report.pdf")


def test_encode_image_png_roundtrip(sample_image_path):
    """encode_image produces PNG bytes that decode to the same size."""
    data = encode_image(load_image(sample_image_path))
    assert data.startswith(b"\x89PNG")
    assert Image.open(io.BytesIO(data)).size == (200, 100)
