"""
ScamCheck: scam risk assessment for text, images and audio.

Submissions are analyzed by a generative model and the model's free-form
answer is normalized into a stable, always-valid result.
"""

__version__ = "1.0.0"

from scamcheck.analysis import AnalysisDispatcher, AnalysisRequest
from scamcheck.config import ScamCheckSettings, get_settings
from scamcheck.exceptions import (
    EmptyUpstreamResponse,
    InvalidRequest,
    ScamCheckError,
    UpstreamError,
)
from scamcheck.llm.schemas import AnalysisVariant, NormalizedAnalysis, ReportAgency, RiskStatus

__all__ = [
    "AnalysisDispatcher",
    "AnalysisRequest",
    "AnalysisVariant",
    "NormalizedAnalysis",
    "ReportAgency",
    "RiskStatus",
    "ScamCheckSettings",
    "get_settings",
    "ScamCheckError",
    "InvalidRequest",
    "UpstreamError",
    "EmptyUpstreamResponse",
]
