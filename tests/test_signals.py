"""Tests for the signal extractors."""

import pytest

from intent_matching.intents import INTENT_KEYS
from intent_matching.signals import (
    TITLE_SIGNALS,
    BODY_SIGNALS,
    build_looking_offering_text,
    from_explicit_intents,
    from_profile_signals,
    from_text_signals,
    validate_classification,
)


class TestExplicitIntents:
    """Tests for from_explicit_intents."""

    @pytest.mark.parametrize("intents,expected", [
        (["selling"], 50),
        (["selling", "buying"], 65),
        (["selling", "buying", "learning"], 75),
        (["selling", "buying", "learning", "networking"], 75),
    ])
    def test_confidence_by_count(self, intents, expected):
        _, confidence = from_explicit_intents(intents)
        assert confidence == expected

    def test_vector_splits_evenly(self):
        vector, _ = from_explicit_intents(["investing", "partnering"])
        assert vector["investing"] == pytest.approx(0.5)
        assert vector["partnering"] == pytest.approx(0.5)
        assert vector["buying"] == 0.0

    def test_unknown_intents_are_dropped(self):
        vector, confidence = from_explicit_intents(["selling", "flying"])
        assert confidence == 50
        assert vector["selling"] == pytest.approx(1.0)

    def test_only_unknown_intents_gives_no_signal(self):
        vector, confidence = from_explicit_intents(["flying", ""])
        assert confidence == 0
        assert sum(vector.values()) == pytest.approx(1.0, abs=0.001)
        assert vector["buying"] == pytest.approx(vector["networking"])

    def test_duplicates_count_once(self):
        _, confidence = from_explicit_intents(["buying", "buying"])
        assert confidence == 50

    def test_empty_selection(self):
        _, confidence = from_explicit_intents([])
        assert confidence == 0


class TestTextSignals:
    """Tests for from_text_signals."""

    def test_title_match(self):
        vector, confidence = from_text_signals("VP Sales", None)
        assert confidence == 12
        assert vector["selling"] == pytest.approx(1.0)

    def test_bio_matches_accumulate(self):
        vector, confidence = from_text_signals(None, "We offer a SaaS platform for partnership programs")
        assert confidence == 36
        assert vector["selling"] == pytest.approx(0.623)
        assert vector["partnering"] == pytest.approx(0.377)

    def test_matching_is_case_insensitive(self):
        _, lower = from_text_signals("venture partner", None)
        _, upper = from_text_signals("VENTURE PARTNER", None)
        assert lower == upper > 0

    def test_confidence_is_capped(self):
        bio = ("We offer a platform. Helping companies with investment and partnerships. "
               "Learning best practices. Connecting people. Seeking a vendor. "
               "Evaluating solutions for our startup.")
        _, confidence = from_text_signals("Founder and investor", bio)
        assert confidence == 60

    def test_no_text(self):
        vector, confidence = from_text_signals(None, None)
        assert confidence == 0
        assert set(vector) == set(INTENT_KEYS)

    def test_profile_signals_alias(self):
        assert from_profile_signals is from_text_signals

    def test_company_name_is_ignored(self):
        assert from_text_signals("CTO", None, "Sales Inc") == from_text_signals("CTO", None)

    def test_tables_cover_every_intent(self):
        for table in (TITLE_SIGNALS, BODY_SIGNALS):
            assert {rule.intent for rule in table} == set(INTENT_KEYS)


class TestLookingOfferingText:
    """Tests for build_looking_offering_text."""

    def test_both_parts(self):
        assert build_looking_offering_text("investors", "mentorship") == \
            "looking for investors. we offer mentorship"

    def test_single_part(self):
        assert build_looking_offering_text(None, "analytics") == "we offer analytics"
        assert build_looking_offering_text("a vendor", None) == "looking for a vendor"

    def test_empty(self):
        assert build_looking_offering_text(None, "") == ""

    def test_looking_for_vendor_reads_as_buying(self):
        vector, confidence = from_text_signals(None, build_looking_offering_text("a vendor", None))
        assert confidence == 12
        assert vector["buying"] == pytest.approx(1.0)


class TestClassificationValidation:
    """Tests for validate_classification."""

    def test_valid_payload_is_normalized(self):
        payload = {key: 0.5 for key in INTENT_KEYS}
        vector = validate_classification(payload)
        assert vector is not None
        assert sum(vector.values()) == pytest.approx(1.0, abs=0.001)

    @pytest.mark.parametrize("bad_value", [1.5, -0.1, "0.5", None, True])
    def test_invalid_value_rejected(self, bad_value):
        payload = {key: 0.1 for key in INTENT_KEYS}
        payload["learning"] = bad_value
        assert validate_classification(payload) is None

    def test_missing_key_rejected(self):
        payload = {key: 0.1 for key in INTENT_KEYS if key != "networking"}
        assert validate_classification(payload) is None

    def test_empty_payload(self):
        assert validate_classification(None) is None
        assert validate_classification({}) is None

    @pytest.mark.parametrize("payload", ['{"buying": 0.5}', [0.5, 0.5], 0.5])
    def test_non_mapping_payload_rejected(self, payload):
        assert validate_classification(payload) is None
