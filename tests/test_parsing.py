import pytest

from vintage_scout.exceptions import MalformedAppraisalResponse
from vintage_scout.models.appraisal import Appraisal
from vintage_scout.vision.parsing import extract_json_object

VALID = {
    "isAuthentic": True,
    "estimatedEra": "1950s",
    "estimatedValue": 180,
    "currentPrice": 35,
    "margin": 145,
    "confidence": 0.88,
    "reasoning": "Chain stitch bowling shirt.",
    "redFlags": [],
    "references": ["Chain stitch bowling shirts sold $150-300"],
}


class TestExtractJsonObject:
    def test_plain_object(self):
        assert extract_json_object('{"a": 1}') == {"a": 1}

    def test_object_wrapped_in_prose_and_fences(self):
        text = 'Here is my appraisal:\n```json\n{"a": {"b": [1, 2]}}\n```\nHope that helps!'
        assert extract_json_object(text) == {"a": {"b": [1, 2]}}

    @pytest.mark.parametrize("text", ["", "no json here", "} backwards {"])
    def test_no_object(self, text):
        with pytest.raises(MalformedAppraisalResponse):
            extract_json_object(text)

    def test_invalid_json(self):
        with pytest.raises(MalformedAppraisalResponse, match="invalid JSON"):
            extract_json_object("{isAuthentic: yes}")

    def test_keeps_raw_text_for_debugging(self):
        with pytest.raises(MalformedAppraisalResponse) as info:
            extract_json_object("sorry, I can't help")
        assert info.value.raw_text == "sorry, I can't help"


class TestAppraisalFromDict:
    def test_parses_wire_shape(self):
        appraisal = Appraisal.from_dict(VALID)

        assert appraisal.is_authentic is True
        assert appraisal.estimated_era == "1950s"
        assert appraisal.estimated_value == 180
        assert appraisal.margin == 145
        assert appraisal.confidence == 0.88
        assert appraisal.references == ["Chain stitch bowling shirts sold $150-300"]

    def test_null_value_forces_null_margin(self):
        data = dict(VALID, estimatedValue=None, margin=50, confidence=1)
        appraisal = Appraisal.from_dict(data)

        assert appraisal.estimated_value is None
        assert appraisal.margin is None

    def test_margin_is_computed_from_value_and_price(self):
        appraisal = Appraisal.from_dict(dict(VALID, margin=None))
        assert appraisal.margin == 145

    def test_missing_current_price_uses_listed_price(self):
        data = {k: v for k, v in VALID.items() if k != "currentPrice"}
        appraisal = Appraisal.from_dict(data, listed_price=40)

        assert appraisal.current_price == 40
        assert appraisal.margin == 140

    def test_confidence_is_clamped(self):
        assert Appraisal.from_dict(dict(VALID, confidence=1.4)).confidence == 1.0
        assert Appraisal.from_dict(dict(VALID, confidence=-0.2)).confidence == 0.0

    @pytest.mark.parametrize(
        "override",
        [
            {"isAuthentic": "yes"},
            {"confidence": "high"},
            {"confidence": None},
            {"estimatedValue": "$120"},
            {"redFlags": "none"},
        ],
    )
    def test_wrong_types_are_malformed(self, override):
        with pytest.raises(MalformedAppraisalResponse):
            Appraisal.from_dict(dict(VALID, **override))

    def test_margin_without_value_is_rejected_at_construction(self):
        with pytest.raises(ValueError):
            Appraisal(
                is_authentic=False,
                estimated_era="Unknown",
                estimated_value=None,
                current_price=10,
                margin=5,
                confidence=0.5,
            )
