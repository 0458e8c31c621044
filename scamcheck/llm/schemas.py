"""
Pydantic schemas for normalized scam analysis results.

Whatever the request shape and whatever the model returned, callers
always receive a fully populated ``NormalizedAnalysis``.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AnalysisVariant(str, Enum):
    """Request shapes, each with its own upstream response schema."""

    TEXT = "text"
    IMAGE = "image"
    AUDIO = "audio"


class RiskStatus(str, Enum):
    """Risk classification shown to the user."""

    NORMAL_CONVERSATION = "Normal Conversation"
    LOW_RISK = "Low Risk Detected"
    MODERATE_RISK = "Moderate Risk Detected"
    HIGH_RISK = "High Risk Detected"
    VERY_HIGH_RISK = "Very High Risk Detected"
    REQUIRES_MORE_CONTEXT = "Requires More Context"
    ANALYSIS_COMPLETE = "Analysis Complete"
    PARSING_ERROR = "Parsing Error"


class Confidence(str, Enum):
    """Model confidence in its own assessment."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    NOT_AVAILABLE = "N/A"


class ReportAgency(BaseModel):
    """An agency where a scam can be reported."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Agency name")
    link: str = Field(..., description="Reporting URL")
    description: str | None = Field(None, description="What the agency handles")


class ComplaintFilingInfo(BaseModel):
    """Complaint filing guidance returned by the audio schema."""

    model_config = ConfigDict(frozen=True)

    introduction: str = Field(..., description="Short lead-in shown above the agencies")
    agencies: list[ReportAgency] = Field(..., min_length=1)


class NormalizedAnalysis(BaseModel):
    """
    Stable result contract for every scam analysis.

    Required fields are always populated, either from the model output or
    from documented defaults. Optional fields depend on the request shape.
    """

    variant: AnalysisVariant = Field(..., description="Request shape the result was normalized under")

    status: RiskStatus = Field(..., description="Risk classification")
    assessment: str = Field(..., description="Short verdict, e.g. 'Likely Not a Scam'")
    scam_probability: str = Field(..., description="Display percentage, e.g. '10%'")
    probability: float = Field(..., ge=0, le=100, description="Numeric scam probability (0-100)")
    ai_confidence: Confidence = Field(..., description="Model confidence")

    explanation_english: str
    explanation_tagalog: str
    advice: str
    how_to_avoid_scams: list[str] = Field(..., min_length=1)
    where_to_report: list[ReportAgency] = Field(..., min_length=1)
    true_vs_false: str = Field(..., description="How to tell true from false information")
    true_vs_false_tagalog: str

    # Shape-dependent fields
    image_analysis: str | None = None
    audio_analysis: str | None = None
    complaint_filing_info: ComplaintFilingInfo | None = None
    is_scam: bool | None = None
    keywords: list[str] | None = None
    content_type: str | None = None
    what_to_do_if_scammed: list[str] | None = None
    what_to_do_if_scammed_tagalog: list[str] | None = None
    timestamp: str | None = Field(None, description="ISO-8601 time of the analysis")

    raw_response: str | None = Field(None, description="Raw model output kept for diagnosis")

    @property
    def is_fallback(self) -> bool:
        """Whether this result stands in for unparseable model output."""
        return self.status == RiskStatus.PARSING_ERROR

    def to_response(self) -> dict[str, Any]:
        """Serialize for the HTTP layer, leaving out absent optional fields."""
        return self.model_dump(mode="json", exclude_none=True)
