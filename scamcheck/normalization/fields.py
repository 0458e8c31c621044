"""
Map parsed model output onto ``NormalizedAnalysis``.

One routine serves all three request shapes. Each shape has a table of
field rules; a rule names the output field, the keys it may be read from
(dotted keys reach into nested objects), a coercer that returns ``None``
for unusable values, and the default used when no key yields a usable
value. Canonical output names are listed first so that a serialized
result normalizes back to itself.
"""

import math
import re
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Callable

from scamcheck.llm.schemas import (
    AnalysisVariant,
    ComplaintFilingInfo,
    Confidence,
    NormalizedAnalysis,
    ReportAgency,
    RiskStatus,
)

DEFAULT_HOW_TO_AVOID = ("Refer to official sources for scam avoidance tips.",)
DEFAULT_WHERE_TO_REPORT = (ReportAgency(name="Local Authorities", link="#"),)
DEFAULT_COMPLAINT_INTRODUCTION = "You can file a complaint with the following agencies:"

_MISSING = object()
_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")
_RANGE = re.compile(r"(\d+(?:\.\d+)?)\s*-\s*(\d+(?:\.\d+)?)")

_STATUS_ALIASES = {
    status.value.lower(): status
    for status in RiskStatus
    if status is not RiskStatus.PARSING_ERROR
}
_STATUS_ALIASES.update({
    "normal": RiskStatus.NORMAL_CONVERSATION,
    "low": RiskStatus.LOW_RISK,
    "low risk": RiskStatus.LOW_RISK,
    "medium": RiskStatus.MODERATE_RISK,
    "medium risk": RiskStatus.MODERATE_RISK,
    "medium risk detected": RiskStatus.MODERATE_RISK,
    "moderate": RiskStatus.MODERATE_RISK,
    "moderate risk": RiskStatus.MODERATE_RISK,
    "high": RiskStatus.HIGH_RISK,
    "high risk": RiskStatus.HIGH_RISK,
    "very high": RiskStatus.VERY_HIGH_RISK,
    "very high risk": RiskStatus.VERY_HIGH_RISK,
})

_CONFIDENCE_ALIASES = {
    "low": Confidence.LOW,
    "medium": Confidence.MEDIUM,
    "moderate": Confidence.MEDIUM,
    "high": Confidence.HIGH,
    "n/a": Confidence.NOT_AVAILABLE,
}


@dataclass(frozen=True)
class FieldRule:
    """How one output field is read from parsed model output."""

    name: str
    sources: tuple[str, ...]
    coerce: Callable[[Any], Any]
    default: Any = None


# Coercers: return the accepted value, or None to try the next source.

def _coerce_text(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _coerce_status(value: Any) -> RiskStatus | None:
    if not isinstance(value, str):
        return None
    return _STATUS_ALIASES.get(" ".join(value.split()).lower())


def _coerce_confidence(value: Any) -> Confidence | None:
    if not isinstance(value, str):
        return None
    words = value.split()
    if not words:
        return None
    return _CONFIDENCE_ALIASES.get(words[0].strip(".,:;()").lower())


def _coerce_probability(value: Any) -> float | None:
    """Read 72, "72%", "about 75-100%" (midpoint) as a 0-100 number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            number = math.inf if value > 0 else -math.inf
    elif isinstance(value, str):
        span = _RANGE.search(value)
        if span:
            number = (float(span.group(1)) + float(span.group(2))) / 2
        else:
            match = _NUMBER.search(value)
            if match is None:
                return None
            number = float(match.group())
    else:
        return None

    if not math.isfinite(number):
        return None
    return round(min(max(number, 0.0), 100.0), 2)


def _coerce_probability_label(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = _coerce_probability(value)
        return None if number is None else f"{number:g}%"
    return _coerce_text(value)


def _coerce_bool(value: Any) -> bool | None:
    return value if isinstance(value, bool) else None


def _coerce_text_list(value: Any) -> list[str] | None:
    if not isinstance(value, list):
        return None
    items = [item for item in value if isinstance(item, str) and item.strip()]
    return items or None


def _coerce_agency(value: Any) -> ReportAgency | None:
    if not isinstance(value, dict):
        return None
    name = _coerce_text(value.get("name"))
    link = _coerce_text(value.get("link")) or _coerce_text(value.get("url"))
    if name is None or link is None:
        return None
    return ReportAgency(
        name=name,
        link=link,
        description=_coerce_text(value.get("description")),
    )


def _coerce_agency_list(value: Any) -> list[ReportAgency] | None:
    if not isinstance(value, list):
        return None
    agencies = [agency for agency in map(_coerce_agency, value) if agency is not None]
    return agencies or None


def _coerce_complaint_info(value: Any) -> ComplaintFilingInfo | None:
    if not isinstance(value, dict):
        return None
    agencies = _coerce_agency_list(value.get("agencies"))
    if agencies is None:
        return None
    return ComplaintFilingInfo(
        introduction=_coerce_text(value.get("introduction")) or DEFAULT_COMPLAINT_INTRODUCTION,
        agencies=agencies,
    )


def _coerce_timestamp(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    try:
        datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    return value


# Derived defaults receive the fields resolved so far.

def _default_assessment(resolved: dict[str, Any]) -> str:
    is_scam = resolved.get("is_scam")
    if is_scam is True:
        return "Likely a Scam"
    if is_scam is False:
        return "Likely Not a Scam"
    return "See explanation"


def _default_complaint_info(resolved: dict[str, Any]) -> ComplaintFilingInfo:
    return ComplaintFilingInfo(
        introduction=DEFAULT_COMPLAINT_INTRODUCTION,
        agencies=resolved["where_to_report"],
    )


_TEXT_RULES = (
    FieldRule("status", ("status",), _coerce_status, RiskStatus.ANALYSIS_COMPLETE),
    FieldRule("is_scam", ("is_scam",), _coerce_bool),
    FieldRule("assessment", ("assessment",), _coerce_text, _default_assessment),
    FieldRule("scam_probability", ("scam_probability",), _coerce_probability_label, "N/A"),
    FieldRule("probability", ("scam_probability", "probability"), _coerce_probability, 0.0),
    FieldRule("ai_confidence", ("ai_confidence",), _coerce_confidence, Confidence.NOT_AVAILABLE),
    FieldRule(
        "explanation_english", ("explanation_english",), _coerce_text,
        "No English explanation provided.",
    ),
    FieldRule(
        "explanation_tagalog", ("explanation_tagalog",), _coerce_text,
        "No Tagalog explanation provided.",
    ),
    FieldRule("advice", ("advice",), _coerce_text, "No advice provided."),
    FieldRule("how_to_avoid_scams", ("how_to_avoid_scams",), _coerce_text_list, DEFAULT_HOW_TO_AVOID),
    FieldRule("where_to_report", ("where_to_report",), _coerce_agency_list, DEFAULT_WHERE_TO_REPORT),
    FieldRule(
        "true_vs_false", ("true_vs_false",), _coerce_text,
        "Verify claims through official channels before acting.",
    ),
    FieldRule(
        "true_vs_false_tagalog", ("true_vs_false_tagalog",), _coerce_text,
        "Beripikahin ang impormasyon sa mga opisyal na channel bago kumilos.",
    ),
    FieldRule("keywords", ("keywords",), _coerce_text_list),
    FieldRule("content_type", ("content_type",), _coerce_text),
    FieldRule("what_to_do_if_scammed", ("what_to_do_if_scammed",), _coerce_text_list),
    FieldRule(
        "what_to_do_if_scammed_tagalog", ("what_to_do_if_scammed_tagalog",), _coerce_text_list,
    ),
    FieldRule("timestamp", ("timestamp",), _coerce_timestamp),
)

_IMAGE_RULES = _TEXT_RULES + (
    FieldRule(
        "image_analysis", ("image_analysis", "imageAnalysis"), _coerce_text,
        "No image analysis provided.",
    ),
)

# The audio schema is camelCase and nests the agencies under
# complaintFilingInfo.
_AUDIO_ALIASES = {
    "status": ("riskLevel", "risk_level"),
    "is_scam": ("isScam",),
    "scam_probability": ("probability",),
    "ai_confidence": ("confidence",),
    "explanation_english": ("explanation",),
    "explanation_tagalog": ("explanationTagalog",),
    "how_to_avoid_scams": ("tutorialsAndTips", "tutorials_and_tips"),
    "where_to_report": ("complaint_filing_info.agencies", "complaintFilingInfo.agencies"),
    "true_vs_false_tagalog": ("trueVsFalseTagalog",),
    "content_type": ("contentType",),
}

_AUDIO_RULES = tuple(
    replace(rule, sources=rule.sources + _AUDIO_ALIASES.get(rule.name, ()))
    for rule in _TEXT_RULES
) + (
    FieldRule(
        "audio_analysis", ("audio_analysis", "audioAnalysis"), _coerce_text,
        "No audio analysis provided.",
    ),
    FieldRule("image_analysis", ("image_analysis", "imageAnalysis"), _coerce_text),
    FieldRule(
        "complaint_filing_info", ("complaint_filing_info", "complaintFilingInfo"),
        _coerce_complaint_info, _default_complaint_info,
    ),
)

FIELD_TABLE: dict[AnalysisVariant, tuple[FieldRule, ...]] = {
    AnalysisVariant.TEXT: _TEXT_RULES,
    AnalysisVariant.IMAGE: _IMAGE_RULES,
    AnalysisVariant.AUDIO: _AUDIO_RULES,
}


def _lookup(record: dict[str, Any], path: str) -> Any:
    value: Any = record
    for key in path.split("."):
        if not isinstance(value, dict) or key not in value:
            return _MISSING
        value = value[key]
    return value


def _resolve(rule: FieldRule, record: dict[str, Any], resolved: dict[str, Any]) -> Any:
    for source in rule.sources:
        value = _lookup(record, source)
        if value is _MISSING or value is None:
            continue
        coerced = rule.coerce(value)
        if coerced is not None:
            return coerced

    if callable(rule.default):
        return rule.default(resolved)
    if isinstance(rule.default, tuple):
        return list(rule.default)
    return rule.default


def normalize(
    parsed: dict[str, Any],
    variant: AnalysisVariant | str,
    raw_text: str | None = None,
    include_raw: bool = False,
) -> NormalizedAnalysis:
    """
    Build a fully populated analysis from a parsed (possibly partial) record.

    Never raises: missing or mistyped fields take their documented
    defaults, and list fields always end up with at least one entry.

    Args:
        parsed: Object parsed from the model output
        variant: Request shape whose schema the record follows
        raw_text: Raw model output
        include_raw: Attach ``raw_text`` as ``raw_response``

    Returns:
        Normalized analysis
    """
    variant = AnalysisVariant(variant)
    record = parsed if isinstance(parsed, dict) else {}

    resolved: dict[str, Any] = {}
    for rule in FIELD_TABLE[variant]:
        resolved[rule.name] = _resolve(rule, record, resolved)

    resolved["variant"] = variant
    if include_raw and raw_text is not None:
        resolved["raw_response"] = raw_text

    return NormalizedAnalysis(**resolved)
