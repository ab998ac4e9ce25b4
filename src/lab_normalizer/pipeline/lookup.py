from __future__ import annotations

import logging
import math
import re

from lab_normalizer.pipeline.resolve import resolver_for
from lab_normalizer.schemas.lab_report import ReferenceRange
from lab_normalizer.schemas.tables import DEFAULT_TABLES, LabTables

logger = logging.getLogger(__name__)

_RAW_UNIT_STRIP = re.compile(r"[^A-Z0-9^/%]")
# Counting units whose numeric scale is interchangeable with the display unit.
_SAME_SCALE_COUNT_UNITS = {"x10^9/L": "x10^9/L", "x10^12/L": "x10^12/L"}


def range_for(key: str | None, tables: LabTables = DEFAULT_TABLES) -> ReferenceRange | None:
    """Reference range for a label, or None when there is none.

    Resolves the label first, so legacy spellings find their range too.
    """
    if not key:
        return None
    canonical = resolver_for(tables).resolve_or_normalize(key)
    return tables.ranges.get(canonical)


def unit_for(label: str | None, tables: LabTables = DEFAULT_TABLES) -> str:
    """Display unit for a label; "" means the unit is unknown and is omitted."""
    key = resolver_for(tables).resolve_or_normalize(label)
    if not key:
        return ""
    unit = tables.display_units.get(key)
    if unit:
        return unit
    for suffix, suffix_unit in tables.unit_suffix_rules:
        if key.endswith(suffix):
            return suffix_unit
    return ""


def normalize_raw_unit(raw_unit: str | None, tables: LabTables = DEFAULT_TABLES) -> str | None:
    """Canonical spelling of a unit as printed on a report, or None."""
    if not raw_unit:
        return None
    # Both micro signs uppercase to a Greek capital mu.
    cleaned = str(raw_unit).upper().replace("Μ", "U")
    cleaned = _RAW_UNIT_STRIP.sub("", cleaned)
    return tables.raw_units.get(cleaned)


def convert_to_canonical(
    label: str,
    value: float,
    raw_unit: str | None = None,
    tables: LabTables = DEFAULT_TABLES,
) -> tuple[float, str]:
    """Express ``value`` (read with ``raw_unit``) in the display unit of ``label``.

    Values that cannot be converted are returned unchanged, along with the
    display unit when one is known and the raw unit otherwise.
    """
    key = resolver_for(tables).resolve_or_normalize(label)
    target = unit_for(key, tables)
    given = normalize_raw_unit(raw_unit, tables)

    if not given or not target or not math.isfinite(value):
        return value, target or (raw_unit or "")

    if target in _SAME_SCALE_COUNT_UNITS:
        return value, target
    if given == target:
        return value, target

    factor = tables.conversion_factors.get((key, given))
    if factor is not None:
        converted = value * factor
        logger.debug("convert: %s %s %s -> %s %s", key, value, given, converted, target)
        return converted, target

    return value, target
