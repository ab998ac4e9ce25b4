from __future__ import annotations

import logging
import math
import re
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator

from lab_normalizer.pipeline.resolve import resolver_for
from lab_normalizer.schemas.lab_report import ExtractedValue
from lab_normalizer.schemas.pipeline import StageResult
from lab_normalizer.schemas.tables import DEFAULT_TABLES, LabTables

logger = logging.getLogger(__name__)

# A value is a standalone number, never digits from inside a token like A1C.
_VALUE = r"(?<![A-Z0-9.])(?P<value>[0-9]+(?:\.[0-9]+)?)"
# Optional unit right after the value. Text is uppercased, so a micro sign
# shows up as Greek capital mu.
_UNIT = r"(?:\s*(?P<unit>%|[A-Z0-9^.]*/[A-ZΜ]+|FL\b|PG\b))?"

_CELLS = (
    r"NEUTROPHILS?|NEUT|LYMPHOCYTES?|LYMPH|MONOCYTES?|MONO"
    r"|EOSINOPHILS?|EOS|BASOPHILS?|BASO"
)

_HEMATOLOGY_LABELS = (
    r"SEGMENTED\s+NEUTROPHILS|NEUTROPHILS?|NEUT|LYMPHOCYTES?|LYMPH"
    r"|MONOCYTES?|MONO|EOSINOPHILS?|EOS|BASOPHILS?|BASO"
    r"|RDW[-\s]?(?:CV|SD)|RDW|PLATELETS?|PLT|MCHC|MCH|MCV|HCT|HGB|HB|RBC|WBC"
    r"|HA?EMOGLOBIN|HA?EMATOCRIT|PCV|MPV|PDW"
)

# Up to 18 non-digit characters between a domain label and its value. The gap
# never runs across another hematology label.
_WINDOW = rf"(?:(?!\b(?:{_HEMATOLOGY_LABELS})\b)[^\d]){{0,18}}"


def _label_group(match: re.Match[str]) -> str:
    return match.group("label")


def _absolute_label(match: re.Match[str]) -> str:
    cell = match.group("cell_after") or match.group("cell_before")
    return f"{cell} ABS"


@dataclass(frozen=True)
class ValuePattern:
    """One named label/value pattern.

    ``regex`` must define a ``value`` group and may define ``unit``;
    ``label_of`` turns a match into the label text handed to the resolver.
    """

    name: str
    regex: re.Pattern[str]
    label_of: Callable[[re.Match[str]], str] = _label_group

    def scan(self, text: str) -> Iterator[re.Match[str]]:
        return self.regex.finditer(text)


ABSOLUTE_DIFFERENTIAL = ValuePattern(
    name="absolute_differential",
    regex=re.compile(
        rf"\b(?:ABS(?:OLUTE)?\.?\s*(?P<cell_after>{_CELLS})\b"
        rf"|(?P<cell_before>{_CELLS})\s*(?:ABS(?:OLUTE)?\b\.?|#))"
        rf"(?:\s*COUNT\b)?{_WINDOW}{_VALUE}{_UNIT}"
    ),
    label_of=_absolute_label,
)

HEMATOLOGY = ValuePattern(
    name="hematology",
    regex=re.compile(rf"\b(?P<label>{_HEMATOLOGY_LABELS})\b{_WINDOW}{_VALUE}{_UNIT}"),
)

GENERIC = ValuePattern(
    name="generic",
    regex=re.compile(rf"(?P<label>[A-Z][A-Z0-9]{{1,15}})\s*[:=]?\s*{_VALUE}{_UNIT}"),
)

# Order matters: within one text, a later pattern never reads a span an
# earlier one already matched.
DOMAIN_PATTERNS: tuple[ValuePattern, ...] = (ABSOLUTE_DIFFERENTIAL, HEMATOLOGY)
FALLBACK_PATTERNS: tuple[ValuePattern, ...] = (GENERIC,)


@dataclass
class ScanInput:
    lines: list[str]
    joined: str


def prepare_text(lines_or_text: Iterable[str] | str | None) -> ScanInput:
    """Uppercase the OCR lines and build the whitespace-collapsed joined text."""
    if lines_or_text is None:
        return ScanInput(lines=[], joined="")
    if isinstance(lines_or_text, str):
        raw_lines = lines_or_text.splitlines()
    else:
        raw_lines = [str(line) for line in lines_or_text if line is not None]
    lines = [line.upper() for line in raw_lines]
    joined = re.sub(r"\s+", " ", " ".join(lines)).strip()
    return ScanInput(lines=lines, joined=joined)


def parse_number(raw: str | float | int | None) -> float:
    """Parse an OCR or user-typed number; NaN when there is none.

    A decimal comma is accepted ("13,4") and stray characters are dropped.
    """
    if raw is None:
        return math.nan
    if isinstance(raw, (int, float)):
        return float(raw)
    cleaned = re.sub(r"[^0-9.+-]", "", str(raw).replace(",", "."))
    try:
        return float(cleaned)
    except ValueError:
        return math.nan


@dataclass
class _Collector:
    tables: LabTables
    found: dict[str, ExtractedValue] = field(default_factory=dict)
    rejected: int = 0

    def offer(self, match: re.Match[str], pattern: ValuePattern, source: str) -> None:
        label = pattern.label_of(match)
        key = resolver_for(self.tables).resolve(label)
        if key is None or key not in self.tables.names:
            self.rejected += 1
            return
        if key in self.found:
            return
        self.found[key] = ExtractedValue(
            key=key,
            raw_value=match.group("value"),
            label=label.strip(),
            unit=match.group("unit"),
            pattern=pattern.name,
            source=source,
        )

    def scan(self, text: str, patterns: tuple[ValuePattern, ...], source: str) -> None:
        claimed: list[tuple[int, int]] = []
        for pattern in patterns:
            for match in pattern.scan(text):
                start, end = match.span()
                if any(start < c_end and c_start < end for c_start, c_end in claimed):
                    continue
                claimed.append((start, end))
                self.offer(match, pattern, source)


def extract_matches(
    lines_or_text: Iterable[str] | str | None,
    tables: LabTables = DEFAULT_TABLES,
) -> list[ExtractedValue]:
    """Find label/value pairs in OCR text, one per canonical key.

    The domain patterns run over the joined text and then over each line;
    the generic pattern runs last over the joined text. The first value
    found for a key is kept. Values stay as the raw numeric strings.
    """
    scan_input = prepare_text(lines_or_text)
    if not scan_input.joined:
        return []
    collector = _Collector(tables=tables)

    collector.scan(scan_input.joined, DOMAIN_PATTERNS, "joined")
    for line in scan_input.lines:
        collector.scan(line, DOMAIN_PATTERNS, "line")
    collector.scan(scan_input.joined, FALLBACK_PATTERNS, "generic")

    logger.debug(
        "extract: %d keys accepted, %d labels rejected",
        len(collector.found),
        collector.rejected,
    )
    return list(collector.found.values())


def extract_values(
    lines_or_text: Iterable[str] | str | None,
    tables: LabTables = DEFAULT_TABLES,
) -> dict[str, str]:
    return {m.key: m.raw_value for m in extract_matches(lines_or_text, tables)}


def extract_stage(
    lines: list[str],
    tables: LabTables = DEFAULT_TABLES,
) -> tuple[list[ExtractedValue], StageResult]:
    start = time.time()

    matches = extract_matches(lines, tables)
    by_source: dict[str, int] = {}
    for m in matches:
        by_source[m.source] = by_source.get(m.source, 0) + 1

    reasoning = (
        f"Extracted {len(matches)} values from {len(lines)} OCR lines. "
        f"Sources: {by_source or 'none'}. "
        f"Keys: {', '.join(m.key for m in matches) or 'none'}."
    )

    logger.info("extract: %d values from %d lines", len(matches), len(lines))

    stage_result = StageResult(
        stage_name="extract",
        input_summary=f"{len(lines)} OCR text lines",
        output={
            "values": {m.key: m.raw_value for m in matches},
            "units": {m.key: m.unit for m in matches if m.unit},
            "value_count": len(matches),
            "by_source": by_source,
        },
        reasoning=reasoning,
        timing_seconds=time.time() - start,
    )
    return matches, stage_result
