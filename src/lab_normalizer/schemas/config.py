from dataclasses import dataclass


@dataclass
class NormalizerConfig:
    ocr_url: str = "http://localhost:5001/ocr"
    ocr_timeout: float = 30.0
    borderline_pct: float = 5.0
    dry_run: bool = False
    round_digits: int = 2  # Rounding applied to corrected values before storage
