"""
Response normalization: raw model text in, ``NormalizedAnalysis`` out.

extract -> parse -> normalize, with ``build_fallback`` covering the cases
where the first two steps fail.
"""

from scamcheck.normalization.envelope import (
    extract_envelope,
    extract_fenced_envelope,
    parse_object,
    strip_code_fence,
)
from scamcheck.normalization.fallback import build_fallback
from scamcheck.normalization.fields import FIELD_TABLE, FieldRule, normalize

__all__ = [
    "extract_envelope",
    "extract_fenced_envelope",
    "strip_code_fence",
    "parse_object",
    "normalize",
    "FieldRule",
    "FIELD_TABLE",
    "build_fallback",
]
