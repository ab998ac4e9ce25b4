from __future__ import annotations

from lab_normalizer.pipeline.resolve import resolver_for
from lab_normalizer.schemas.tables import DEFAULT_TABLES, LabTables


def note_for(label: str | None, status: str, tables: LabTables = DEFAULT_TABLES) -> str | None:
    """Advisory note for a status: test-specific first, then the generic one.

    Normal results never get a note.
    """
    if status == "Normal":
        return None
    key = resolver_for(tables).resolve_or_normalize(label)
    specific = tables.specific_notes.get(key, {}).get(status)
    if specific:
        return specific
    return tables.generic_notes.get(status)
