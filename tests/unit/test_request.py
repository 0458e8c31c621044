"""Tests for the analysis request model."""

import pytest

from scamcheck.analysis import AnalysisRequest
from scamcheck.exceptions import InvalidRequest
from scamcheck.llm.gemini import Attachment
from scamcheck.llm.schemas import AnalysisVariant


class TestSelectVariant:
    """Test request shape selection."""

    @pytest.mark.parametrize(
        "kwargs,expected",
        [
            ({"text": "You won a prize!"}, AnalysisVariant.TEXT),
            ({"image": "aW1hZ2U="}, AnalysisVariant.IMAGE),
            ({"text": "see pic", "image": "aW1hZ2U="}, AnalysisVariant.IMAGE),
            ({"audio": "YXVkaW8="}, AnalysisVariant.AUDIO),
            ({"text": "t", "image": "aW1hZ2U=", "audio": "YXVkaW8="}, AnalysisVariant.AUDIO),
            ({"text": "t", "image": "   ", "audio": ""}, AnalysisVariant.TEXT),
        ],
    )
    def test_priority(self, kwargs, expected):
        """Test audio wins over image, and image over text."""
        assert AnalysisRequest(**kwargs).select_variant() == expected

    @pytest.mark.parametrize(
        "kwargs",
        [
            {},
            {"text": ""},
            {"text": "   \n\t"},
            {"text": None, "image": "", "audio": "  "},
        ],
    )
    def test_empty_request(self, kwargs):
        """Test a request with nothing to analyze is rejected."""
        with pytest.raises(InvalidRequest) as exc_info:
            AnalysisRequest(**kwargs).select_variant()

        assert "required" in exc_info.value.message


class TestAttachments:
    """Test binary inputs and data URLs."""

    def test_default_mime_types(self):
        """Test plain base64 keeps the default MIME types."""
        request = AnalysisRequest(image="aW1n", audio="YXVk")

        assert request.attachments() == [
            Attachment(mime_type="image/jpeg", data="aW1n"),
            Attachment(mime_type="audio/webm", data="YXVk"),
        ]

    def test_data_url(self):
        """Test a data URL prefix is stripped and its MIME type used."""
        request = AnalysisRequest(image="data:image/png;base64,aW1n")

        assert request.image == "aW1n"
        assert request.image_mime_type == "image/png"

    def test_data_url_with_parameters(self):
        """Test extra data URL parameters are skipped."""
        request = AnalysisRequest(audio="data:audio/ogg;codecs=opus;base64,YXVk")

        assert request.audio == "YXVk"
        assert request.audio_mime_type == "audio/ogg"

    def test_explicit_mime_type(self):
        """Test an explicit MIME type is used for plain base64."""
        request = AnalysisRequest(audio="YXVk", audio_mime_type="audio/mpeg")

        assert request.attachments() == [Attachment(mime_type="audio/mpeg", data="YXVk")]

    def test_text_only_has_no_attachments(self):
        """Test text requests send no binary parts."""
        assert AnalysisRequest(text="hello").attachments() == []

    def test_inline_data_part(self):
        """Test the Gemini part layout of an attachment."""
        part = Attachment(mime_type="image/png", data="aW1n").to_part()

        assert part == {"inline_data": {"mime_type": "image/png", "data": "aW1n"}}
