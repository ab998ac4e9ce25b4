"""Tests for canonical key resolution."""

import pytest
from lab_normalizer.pipeline.resolve import KeyResolver, normalize_label, resolve_key
from lab_normalizer.schemas import DEFAULT_TABLES, LabTables


def test_canonical_keys_resolve_to_themselves():
    """Every canonical key is its own resolution."""
    for key in DEFAULT_TABLES.names:
        assert resolve_key(key) == key


def test_aliases_resolve_to_targets():
    """Every alias resolves to its canonical target."""
    for alias, target in DEFAULT_TABLES.aliases.items():
        assert resolve_key(alias) == target, alias


@pytest.mark.parametrize("blank", ["", None, "   ", "--//--"])
def test_blank_input_is_not_found(blank):
    """Empty, missing or symbol-only labels resolve to None without raising."""
    assert resolve_key(blank) is None


def test_normalization_strips_punctuation_and_case():
    """Labels are uppercased and reduced to A-Z0-9 before matching."""
    assert normalize_label("rdw-cv (%)") == "RDWCV"
    assert resolve_key("rdw-cv") == "RDWCV"
    assert resolve_key("Hemoglobin") == "HGB"
    assert resolve_key("p.c.v.") == "HCT"


def test_verbose_label_resolves_by_containment():
    """Verbose lab phrasing falls back to substring matching."""
    assert resolve_key("Total Count (WBC), EDTA blood") == "WBC"
    assert resolve_key("Total Count (WBC) 6200") == "WBC"
    assert resolve_key("Haemoglobin result") == "HGB"


def test_longest_key_wins_substring_match():
    """A longer canonical key is preferred over a shorter one it contains."""
    assert resolve_key("MCHC value") == "MCHC"
    assert resolve_key("Neutrophils Abs count") == "NEUTROPHILSABS"


def test_unknown_label_is_not_found():
    """Labels outside the vocabulary resolve to None."""
    assert resolve_key("Ferritin") is None
    assert resolve_key("Vitamin D") is None


def test_equal_length_keys_tie_break_on_declaration_order():
    """Among equally long contained keys, the first declared one wins."""
    tables = LabTables(names={"AB": "first", "BC": "second"}, aliases={}, ranges={})
    assert KeyResolver(tables).resolve("abc") == "AB"


def test_alias_substring_longest_first():
    """Alias containment also prefers the longest alias."""
    tables = LabTables(
        names={"X": "x", "Y": "y"},
        aliases={"HB": "X", "HBA": "Y"},
        ranges={},
    )
    # Neither canonical key appears in "QHBAQ" except through the aliases.
    assert KeyResolver(tables).resolve("qhbaq") == "Y"


def test_resolver_uses_supplied_tables(tiny_tables):
    """A resolver bound to alternate tables only knows their vocabulary."""
    resolver = KeyResolver(tiny_tables)
    assert resolver.resolve("glucose") == "GLU"
    assert resolver.resolve("Sodium") == "NA"
    assert resolver.resolve("HGB") is None
    assert resolve_key("glucose", tables=tiny_tables) == "GLU"


def test_resolve_or_normalize_falls_back_to_label():
    """Unresolvable labels keep their normalized spelling."""
    resolver = KeyResolver()
    assert resolver.resolve_or_normalize("Vitamin D") == "VITAMIND"
    assert resolver.resolve_or_normalize("hb") == "HGB"
