"""
Shared fixtures for ScamCheck tests.
"""

import json

import pytest

from scamcheck.config import GeminiSettings, ScamCheckSettings
from scamcheck.exceptions import UpstreamError


class FakeBackend:
    """Generative backend returning canned text and recording calls."""

    def __init__(self, reply: str = "", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls = []
        self.closed = False

    async def invoke(self, prompt, attachments=()):
        self.calls.append((prompt, list(attachments)))
        if self.error is not None:
            raise self.error
        return self.reply

    async def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep developer credentials and overrides out of the tests."""
    for name in (
        "GEMINI_API_KEY",
        "SCAMCHECK_GEMINI_API_KEY",
        "SCAMCHECK_ENVIRONMENT",
        "SCAMCHECK_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def dev_settings():
    """Development settings: raw model output is attached to results."""
    return ScamCheckSettings(environment="dev", gemini=GeminiSettings(api_key="test-key"))


@pytest.fixture
def prod_settings():
    """Production settings: raw model output only on fallback."""
    return ScamCheckSettings(environment="prod", gemini=GeminiSettings(api_key="test-key"))


@pytest.fixture
def text_reply():
    """A complete text-schema answer wrapped in prose and a code fence."""
    payload = {
        "status": "High Risk Detected",
        "assessment": "Highly Likely a Scam",
        "scam_probability": "90%",
        "ai_confidence": "High",
        "explanation_english": "The link imitates a bank domain using typosquatting.",
        "explanation_tagalog": "Ginagaya ng link ang domain ng bangko.",
        "advice": "Do not click the link. Contact your bank directly.",
        "how_to_avoid_scams": ["Check the sender", "Never share your OTP"],
        "where_to_report": [
            {"name": "PNP ACG", "link": "https://www.pnpacg.ph/"},
            {"name": "NBI CCD", "link": "https://www.nbi.gov.ph/cybercrime/"},
        ],
        "true_vs_false": "Banks never ask for your OTP by text.",
        "true_vs_false_tagalog": "Hindi humihingi ng OTP ang bangko sa text.",
    }
    return "Here is my analysis:\n```json\n" + json.dumps(payload) + "\n```"


@pytest.fixture
def audio_reply():
    """A complete audio-schema answer in a code fence."""
    payload = {
        "isScam": True,
        "probability": 85,
        "confidence": "Medium",
        "riskLevel": "Very High",
        "explanation": "The caller pretends to be from a bank and asks for an OTP.",
        "explanationTagalog": "Nagpapanggap na taga-bangko ang tumatawag.",
        "advice": "Hang up and call the bank's official hotline.",
        "tutorialsAndTips": ["Never share OTPs over the phone"],
        "complaintFilingInfo": {
            "introduction": "Report voice phishing to:",
            "agencies": [
                {
                    "name": "NBI CCD",
                    "url": "https://www.nbi.gov.ph/cybercrime/",
                    "description": "Cybercrime complaints",
                }
            ],
        },
        "audioAnalysis": "Urgent tone, requests a one-time PIN.",
    }
    return "```json\n" + json.dumps(payload) + "\n```"


def upstream_failure(status_code: int = 503) -> UpstreamError:
    return UpstreamError(
        f"Gemini API request failed with status {status_code}",
        status_code=status_code,
        body='{"error": "unavailable"}',
    )


@pytest.fixture
def make_backend():
    """Factory for fake backends."""
    return FakeBackend


@pytest.fixture
def make_upstream_error():
    """Factory for backend status failures."""
    return upstream_failure
