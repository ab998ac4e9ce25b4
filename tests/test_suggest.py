"""Tests for report-level test name suggestion."""

from lab_normalizer.pipeline.suggest import count_occurrences, detect_keys, suggest_test_name


def test_detect_keys_in_declaration_order():
    """Keys appearing verbatim are listed in vocabulary order."""
    assert detect_keys("wbc 6.2 hgb 13.4") == ["HGB", "WBC"]
    assert detect_keys("") == []
    assert detect_keys(None) == []


def test_cbc_word_suggests_cbc():
    """A report that says CBC is a CBC."""
    suggestion = suggest_test_name(["HGB"], {"HGB": "13.4"}, "Complete Blood Count (CBC)")
    assert suggestion.name == "CBC"
    assert suggestion.category == "Blood"


def test_enough_core_values_suggest_cbc():
    """Four CBC core values are enough without the word CBC."""
    values = {"RBC": "4.5", "WBC": "6", "HGB": "13", "HCT": "40"}
    suggestion = suggest_test_name(list(values), values, "RBC 4.5 WBC 6 HGB 13 HCT 40")
    assert suggestion.name == "CBC"


def test_cbc_must_be_a_whole_word():
    """CBC inside a longer word does not count."""
    suggestion = suggest_test_name(["GLUCOSE"], {"GLUCOSE": "95"}, "XCBCX GLUCOSE 95")
    assert suggestion.name == "GLUCOSE"


def test_best_scoring_key_wins():
    """Having a value outweighs a bare mention."""
    suggestion = suggest_test_name(["GLUCOSE", "HDL"], {"GLUCOSE": "95"}, "GLUCOSE 95 HDL")
    assert suggestion.name == "GLUCOSE"
    assert suggestion.category is None


def test_no_keys_no_suggestion():
    """Nothing detected means nothing suggested."""
    assert suggest_test_name([], {}, "hello") is None


def test_count_occurrences_whole_words():
    """Only whole-word mentions are counted."""
    assert count_occurrences("HDL 50 HDLX HDL", "HDL") == 2
    assert count_occurrences("HDL", "") == 0
