"""
LLM integration for ScamCheck.

Result schemas, prompt templates, and the Gemini backend client.
"""

from scamcheck.llm.gemini import (
    Attachment,
    GeminiClient,
    GenerativeBackend,
    build_payload,
    extract_candidate_text,
)
from scamcheck.llm.prompts import PROMPT_TEMPLATES, render_prompt
from scamcheck.llm.schemas import (
    AnalysisVariant,
    ComplaintFilingInfo,
    Confidence,
    NormalizedAnalysis,
    ReportAgency,
    RiskStatus,
)

__all__ = [
    # Schemas
    "AnalysisVariant",
    "ComplaintFilingInfo",
    "Confidence",
    "NormalizedAnalysis",
    "ReportAgency",
    "RiskStatus",
    # Backend
    "Attachment",
    "GeminiClient",
    "GenerativeBackend",
    "build_payload",
    "extract_candidate_text",
    # Prompts
    "PROMPT_TEMPLATES",
    "render_prompt",
]
