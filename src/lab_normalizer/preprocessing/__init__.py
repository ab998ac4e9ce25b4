"""Image loading for the OCR collaborator."""

from lab_normalizer.preprocessing.image_ops import (
    convert_pdf_to_images,
    encode_image,
    load_image,
)

__all__ = ["convert_pdf_to_images", "encode_image", "load_image"]
