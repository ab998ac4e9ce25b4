from __future__ import annotations

import logging
import re

from lab_normalizer.schemas.tables import DEFAULT_TABLES, LabTables

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^A-Z0-9]")
_WBC_WORD = re.compile(r"\bWBC\b", re.IGNORECASE)
_TOTAL_WORD = re.compile(r"\bTOTAL\b", re.IGNORECASE)


def normalize_label(raw: str | None) -> str:
    """Uppercase and drop every character outside A-Z0-9."""
    if not raw:
        return ""
    return _NON_ALNUM.sub("", str(raw).upper())


class KeyResolver:
    """Map free-text labels onto canonical keys.

    Lookup order, first hit wins:
    1. the normalized label is itself a canonical key
    2. the normalized label is an exact alias
    3. the normalized label contains a canonical key (longest key first)
    4. the normalized label contains an alias (longest alias first)
    5. the raw label has both "WBC" and "TOTAL" as whole words

    Only exact and substring matches are attempted, never edit distance.
    """

    def __init__(self, tables: LabTables = DEFAULT_TABLES) -> None:
        self.tables = tables

    def resolve(self, raw_label: str | None) -> str | None:
        normalized = normalize_label(raw_label)
        if not normalized:
            return None

        names = self.tables.names
        if normalized in names:
            return normalized
        target = self.tables.aliases.get(normalized)
        if target is not None:
            return target

        for key in self.tables.keys_by_length:
            if key in normalized:
                logger.debug("resolve: %r contains key %s", raw_label, key)
                return key
        for alias, target in self.tables.aliases_by_length:
            if alias in normalized:
                logger.debug("resolve: %r contains alias %s -> %s", raw_label, alias, target)
                return target

        raw = str(raw_label)
        if _WBC_WORD.search(raw) and _TOTAL_WORD.search(raw) and "WBC" in names:
            return "WBC"
        return None

    def resolve_or_normalize(self, raw_label: str | None) -> str:
        """Canonical key when one resolves, otherwise the normalized label."""
        return self.resolve(raw_label) or normalize_label(raw_label)


_DEFAULT_RESOLVER = KeyResolver()


def resolver_for(tables: LabTables) -> KeyResolver:
    if tables is DEFAULT_TABLES:
        return _DEFAULT_RESOLVER
    return KeyResolver(tables)


def resolve_key(raw_label: str | None, tables: LabTables = DEFAULT_TABLES) -> str | None:
    return resolver_for(tables).resolve(raw_label)
