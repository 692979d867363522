import dataclasses

import pytest

from skinscore.knowledge_base import (
    ADVANCED_DEFAULTS,
    ADVANCED_KNOWLEDGE_BASE,
    BASIC_DEFAULTS,
    BASIC_KNOWLEDGE_BASE,
    SKIN_TYPE_COMPATIBILITY,
    SKIN_TYPES,
    compatibility_multiplier,
    normalize_name,
)


class TestLookup:
    def test_case_and_whitespace_insensitive(self):
        record = BASIC_KNOWLEDGE_BASE.lookup("  Hyaluronic ACID ")
        assert record.safety_score == 95
        assert record.effectiveness_score == 90
        assert record.research_backing == 95
        assert BASIC_KNOWLEDGE_BASE.contains("HYALURONIC ACID")

    def test_unknown_name_returns_defaults(self):
        assert BASIC_KNOWLEDGE_BASE.lookup("Unobtainium Extract") == BASIC_DEFAULTS
        assert ADVANCED_KNOWLEDGE_BASE.lookup("Unobtainium Extract") == ADVANCED_DEFAULTS
        assert not BASIC_KNOWLEDGE_BASE.contains("Unobtainium Extract")

    def test_no_partial_matching(self):
        # "glycerin" is known, but lookup is verbatim only
        assert not BASIC_KNOWLEDGE_BASE.contains("glycerine")
        assert BASIC_KNOWLEDGE_BASE.lookup("glycerin extract") == BASIC_DEFAULTS

    def test_empty_and_invalid_names(self):
        assert BASIC_KNOWLEDGE_BASE.lookup("") == BASIC_DEFAULTS
        assert BASIC_KNOWLEDGE_BASE.lookup(None) == BASIC_DEFAULTS
        assert normalize_name(None) == ""

    def test_zero_values_are_kept(self):
        water = ADVANCED_KNOWLEDGE_BASE.lookup("Water")
        assert water.allergy_risk == 0
        assert water.naturalness == 100

    def test_missing_optional_attributes_use_defaults(self):
        water = ADVANCED_KNOWLEDGE_BASE.lookup("water")
        assert water.innovation == ADVANCED_DEFAULTS.innovation
        glycerin = BASIC_KNOWLEDGE_BASE.lookup("glycerin")
        assert glycerin.naturalness == BASIC_DEFAULTS.naturalness


class TestImmutability:
    def test_records_are_frozen(self):
        record = BASIC_KNOWLEDGE_BASE.lookup("retinol")
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.safety_score = 0

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            SKIN_TYPE_COMPATIBILITY["dry"]["glycerin"] = 5.0
        with pytest.raises(TypeError):
            BASIC_KNOWLEDGE_BASE._records["new"] = BASIC_DEFAULTS


class TestCompatibilityRules:
    def test_every_skin_type_has_a_table(self):
        assert set(SKIN_TYPE_COMPATIBILITY) == set(SKIN_TYPES)

    def test_known_multiplier(self):
        assert compatibility_multiplier("dry", "Hyaluronic Acid") == 1.2
        assert compatibility_multiplier("Sensitive", "fragrance") == 0.2

    def test_missing_rule_is_neutral(self):
        assert compatibility_multiplier("normal", "glycerin") == 1.0
        assert compatibility_multiplier("dry", "unknown thing") == 1.0
        assert compatibility_multiplier("alien", "glycerin") == 1.0
