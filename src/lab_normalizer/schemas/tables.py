from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from types import MappingProxyType
from typing import Mapping

from lab_normalizer.schemas.dictionary import TEST_ALIASES, TEST_NAMES
from lab_normalizer.schemas.lab_report import RANGE_STATUSES, ReferenceRange
from lab_normalizer.schemas.notes import GENERIC_NOTES, SPECIFIC_NOTES
from lab_normalizer.schemas.reference_ranges import REFERENCE_RANGES
from lab_normalizer.schemas.units import (
    CONVERSION_FACTORS,
    DISPLAY_UNITS,
    RAW_UNIT_MAP,
    UNIT_SUFFIX_RULES,
)


@dataclass(frozen=True, eq=False)
class LabTables:
    """Immutable bundle of every static table the normalizer reads.

    Pass an alternate instance (``tables=``) to any lookup to swap in a
    different vocabulary. Construction validates cross-table consistency and
    raises ``ValueError`` on a broken bundle.
    """

    names: Mapping[str, str]
    aliases: Mapping[str, str]
    ranges: Mapping[str, ReferenceRange]
    display_units: Mapping[str, str] = field(default_factory=dict)
    unit_suffix_rules: tuple[tuple[str, str], ...] = ()
    raw_units: Mapping[str, str] = field(default_factory=dict)
    conversion_factors: Mapping[tuple[str, str], float] = field(default_factory=dict)
    specific_notes: Mapping[str, Mapping[str, str]] = field(default_factory=dict)
    generic_notes: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in (
            "names",
            "aliases",
            "ranges",
            "display_units",
            "raw_units",
            "conversion_factors",
            "specific_notes",
            "generic_notes",
        ):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))
        object.__setattr__(
            self,
            "specific_notes",
            MappingProxyType({k: MappingProxyType(dict(v)) for k, v in self.specific_notes.items()}),
        )
        self._validate()

    def _validate(self) -> None:
        problems: list[str] = []
        for key in self.names:
            if not key or not key.isalnum() or key != key.upper():
                problems.append(f"canonical key {key!r} is not uppercase alphanumeric")
        for alias, target in self.aliases.items():
            if not alias.isalnum() or alias != alias.upper():
                problems.append(f"alias {alias!r} is not uppercase alphanumeric")
            if target not in self.names:
                problems.append(f"alias {alias!r} targets unknown key {target!r}")
        for table_name in ("ranges", "display_units", "specific_notes"):
            for key in getattr(self, table_name):
                if key not in self.names:
                    problems.append(f"{table_name} entry {key!r} is not a canonical key")
        for key, notes in self.specific_notes.items():
            for status in notes:
                if status not in RANGE_STATUSES:
                    problems.append(f"note for {key!r} uses unknown status {status!r}")
        if problems:
            raise ValueError("invalid lab tables: " + "; ".join(problems))

    @cached_property
    def keys_by_length(self) -> tuple[str, ...]:
        """Canonical keys, longest first; declaration order breaks ties."""
        return tuple(sorted(self.names, key=len, reverse=True))

    @cached_property
    def aliases_by_length(self) -> tuple[tuple[str, str], ...]:
        ordered = sorted(self.aliases.items(), key=lambda item: len(item[0]), reverse=True)
        return tuple(ordered)


DEFAULT_TABLES = LabTables(
    names=TEST_NAMES,
    aliases=TEST_ALIASES,
    ranges=REFERENCE_RANGES,
    display_units=DISPLAY_UNITS,
    unit_suffix_rules=UNIT_SUFFIX_RULES,
    raw_units=RAW_UNIT_MAP,
    conversion_factors=CONVERSION_FACTORS,
    specific_notes=SPECIFIC_NOTES,
    generic_notes=GENERIC_NOTES,
)
