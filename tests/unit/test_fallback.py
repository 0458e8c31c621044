"""Tests for the parse-failure fallback analysis."""

import pytest

from scamcheck.exceptions import NoJsonDelimiters, NormalizationError, ParseError
from scamcheck.llm.schemas import AnalysisVariant, Confidence, RiskStatus
from scamcheck.normalization import build_fallback, extract_envelope, parse_object


def fallback_for(raw: str, variant=AnalysisVariant.TEXT):
    """Run extraction and parsing, and build the fallback from the failure."""
    try:
        parse_object(extract_envelope(raw), raw)
    except NormalizationError as e:
        return e, build_fallback(e, raw, variant)
    raise AssertionError("expected a normalization failure")


class TestFallback:
    """Test the Parsing Error result."""

    def test_refusal_without_braces(self):
        """Test a refusal with no JSON at all."""
        raw = "I cannot comply with this request."

        error, result = fallback_for(raw)

        assert isinstance(error, NoJsonDelimiters)
        assert result.status == RiskStatus.PARSING_ERROR
        assert result.raw_response == raw
        assert result.is_fallback

    def test_truncated_json(self):
        """Test braces around an incomplete object take the parse path."""
        raw = '{"status":"High Risk Detected","where_to_report":[{"name":"X"}'

        error, result = fallback_for(raw)

        assert isinstance(error, ParseError)
        assert result.status == RiskStatus.PARSING_ERROR
        assert raw in result.explanation_english
        assert result.raw_response == raw

    def test_unterminated_object(self):
        """Test an object missing its closing brace still ends in the fallback."""
        raw = '{"status":"High Risk Detected"'

        _, result = fallback_for(raw)

        assert result.status == RiskStatus.PARSING_ERROR
        assert raw in result.explanation_english
        assert result.raw_response == raw

    def test_sentinel_values(self):
        """Test the fallback uses fixed placeholders."""
        result = build_fallback(ParseError("Expecting value (1, 2)", raw_text="{x}"), "{x}")

        assert result.assessment == "Could not parse AI response"
        assert result.scam_probability == "N/A"
        assert result.probability == 0.0
        assert result.ai_confidence == Confidence.NOT_AVAILABLE
        assert "Expecting value (1, 2)" in result.explanation_english
        assert "Expecting value (1, 2)" in result.explanation_tagalog
        assert result.how_to_avoid_scams == ["Exercise caution."]
        assert [(a.name, a.link) for a in result.where_to_report] == [("Error", "#")]

    def test_plain_exception_message(self):
        """Test non-library exceptions are described by their text."""
        result = build_fallback(ValueError("boom"), "raw")

        assert "boom" in result.explanation_english

    @pytest.mark.parametrize(
        "variant,field",
        [
            (AnalysisVariant.IMAGE, "image_analysis"),
            (AnalysisVariant.AUDIO, "audio_analysis"),
        ],
    )
    def test_variant_shape(self, variant, field):
        """Test the fallback carries the sections of its request shape."""
        result = build_fallback(NoJsonDelimiters("no braces", raw_text="nope"), "nope", variant)

        assert result.variant == variant
        assert getattr(result, field)
        if variant is AnalysisVariant.AUDIO:
            assert result.complaint_filing_info.agencies == result.where_to_report
        else:
            assert result.complaint_filing_info is None

    def test_serializes_raw_response(self):
        """Test the raw text survives serialization."""
        result = build_fallback(NoJsonDelimiters("no braces", raw_text="nope"), "nope")

        assert result.to_response()["raw_response"] == "nope"
