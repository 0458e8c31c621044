"""
Well-formed stand-in result for model output that could not be parsed.
"""

from scamcheck.llm.schemas import (
    AnalysisVariant,
    ComplaintFilingInfo,
    Confidence,
    NormalizedAnalysis,
    ReportAgency,
    RiskStatus,
)
from scamcheck.normalization.fields import DEFAULT_COMPLAINT_INTRODUCTION

_UNAVAILABLE = "Analysis unavailable: the AI response could not be parsed."


def build_fallback(
    error: Exception,
    raw_text: str,
    variant: AnalysisVariant | str = AnalysisVariant.TEXT,
) -> NormalizedAnalysis:
    """
    Build a ``Parsing Error`` analysis that carries the raw model output.

    The result has the same shape a successful analysis of ``variant``
    would have, so callers never need a separate error rendering path.
    ``raw_response`` is always set, whatever the environment.
    """
    variant = AnalysisVariant(variant)
    message = getattr(error, "message", None) or str(error) or type(error).__name__
    where_to_report = [ReportAgency(name="Error", link="#")]

    result = NormalizedAnalysis(
        variant=variant,
        status=RiskStatus.PARSING_ERROR,
        assessment="Could not parse AI response",
        scam_probability="N/A",
        probability=0.0,
        ai_confidence=Confidence.NOT_AVAILABLE,
        explanation_english=(
            f"Error parsing response: {message}. Raw response from AI: {raw_text}"
        ),
        explanation_tagalog=(
            f"Hindi ma-parse ang tugon ng AI ({message}). Suriin ang raw response."
        ),
        advice="Please check the raw AI response or refine the AI prompt if issues persist.",
        how_to_avoid_scams=["Exercise caution."],
        where_to_report=where_to_report,
        true_vs_false=_UNAVAILABLE,
        true_vs_false_tagalog="Hindi available ang pagsusuri dahil hindi ma-parse ang tugon ng AI.",
        raw_response=raw_text,
    )

    if variant is AnalysisVariant.IMAGE:
        result.image_analysis = _UNAVAILABLE
    elif variant is AnalysisVariant.AUDIO:
        result.audio_analysis = _UNAVAILABLE
        result.complaint_filing_info = ComplaintFilingInfo(
            introduction=DEFAULT_COMPLAINT_INTRODUCTION,
            agencies=where_to_report,
        )

    return result
