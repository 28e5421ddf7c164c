"""Unit tests for the analysis result schema and its contract check."""

import json

import pytest
from pydantic import ValidationError

from voicecolor.core.models import AnalysisResult, ColorParameter, is_hex_color


class TestParsing:
    """Wire-format parsing and serialization."""

    def test_camel_case_aliases(self, stub_payload):
        result = AnalysisResult.model_validate(stub_payload)

        first = result.parameters[0]
        assert first.sub_label == stub_payload["parameters"][0]["subLabel"]
        assert first.color_code == stub_payload["parameters"][0]["colorCode"]

    def test_to_wire_round_trips_exactly(self, stub_json):
        result = AnalysisResult.model_validate_json(stub_json)

        assert json.dumps(result.to_wire(), ensure_ascii=False) == stub_json

    def test_integer_score_stays_integer(self, stub_payload):
        result = AnalysisResult.model_validate(stub_payload)

        assert isinstance(result.parameters[0].score, int)
        assert isinstance(result.to_wire()["parameters"][0]["score"], int)

    def test_float_score_accepted(self):
        param = ColorParameter(
            id="red", label="レッド", subLabel="行動力", score=72.5,
            description="...", colorCode="#EF4444",
        )
        assert param.score == 72.5

    def test_missing_field_rejected(self, stub_payload):
        del stub_payload["parameters"][3]["colorCode"]

        with pytest.raises(ValidationError):
            AnalysisResult.model_validate(stub_payload)

    def test_missing_summary_rejected(self, stub_payload):
        del stub_payload["summary"]

        with pytest.raises(ValidationError):
            AnalysisResult.model_validate(stub_payload)


class TestContract:
    """``contract_violations()`` distinguishes conforming results."""

    def test_conforming(self, sample_result):
        assert sample_result.contract_violations() == []
        assert sample_result.is_conforming()

    @pytest.mark.parametrize("count", [11, 13])
    def test_wrong_count_detected(self, payload_factory, count):
        result = AnalysisResult.model_validate(payload_factory(count))

        assert not result.is_conforming()
        assert any(f"got {count}" in v for v in result.contract_violations())

    def test_duplicate_id_detected(self, stub_payload):
        stub_payload["parameters"][1]["id"] = stub_payload["parameters"][0]["id"]
        result = AnalysisResult.model_validate(stub_payload)

        assert any("duplicate" in v for v in result.contract_violations())

    @pytest.mark.parametrize("score", [-1, 101, 150.5])
    def test_score_out_of_range_detected(self, stub_payload, score):
        stub_payload["parameters"][5]["score"] = score
        result = AnalysisResult.model_validate(stub_payload)

        violations = result.contract_violations()
        assert len(violations) == 1
        assert "outside [0, 100]" in violations[0]

    @pytest.mark.parametrize("score", [0, 100])
    def test_score_bounds_inclusive(self, stub_payload, score):
        stub_payload["parameters"][0]["score"] = score

        assert AnalysisResult.model_validate(stub_payload).is_conforming()

    @pytest.mark.parametrize("color", ["", "red", "#12345", "EF4444"])
    def test_bad_color_detected(self, stub_payload, color):
        stub_payload["parameters"][2]["colorCode"] = color
        result = AnalysisResult.model_validate(stub_payload)

        assert any("not a hex color" in v for v in result.contract_violations())

    def test_empty_parameters(self):
        result = AnalysisResult(summary="?")

        assert result.contract_violations() == ["expected 12 parameters, got 0"]


@pytest.mark.parametrize(
    ("value", "expected"),
    [("#EF4444", True), ("#fff", True), ("#ef4444", True), ("#GGGGGG", False), ("", False)],
)
def test_is_hex_color(value, expected):
    assert is_hex_color(value) is expected
