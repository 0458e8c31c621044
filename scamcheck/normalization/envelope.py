"""
Isolate and parse the JSON object inside raw model output.

The model is told to answer with JSON only, but it regularly adds a
sentence of commentary or wraps the object in a markdown code fence.
Everything between the first ``{`` and the last ``}`` is taken as the
envelope. Prose that itself contains a brace pair before the real object
selects the wrong span; the prompts are first-party, so that case is
accepted rather than handled.
"""

import json
import re
from typing import Any

from scamcheck.exceptions import NoJsonDelimiters, ParseError

_FENCE_OPENER = re.compile(r"^```[\w+-]*[ \t]*\n?")
_FENCE_CLOSER = re.compile(r"\n?[ \t]*```$")


def extract_envelope(raw: str) -> str:
    """
    Return the substring from the first ``{`` through the last ``}``.

    Raises:
        NoJsonDelimiters: If either brace is missing or they are out of order
    """
    start = raw.find("{")
    end = raw.rfind("}")

    if start == -1 or end == -1 or end < start:
        raise NoJsonDelimiters(
            "Valid JSON object delimiters {} not found in AI response. "
            "Ensure the AI returns a single JSON object.",
            raw_text=raw,
        )

    return raw[start:end + 1]


def strip_code_fence(raw: str) -> str:
    """Remove a leading ```lang opener and a trailing ``` closer, if present."""
    text = raw.strip()
    text = _FENCE_OPENER.sub("", text, count=1)
    text = _FENCE_CLOSER.sub("", text, count=1)
    return text


def extract_fenced_envelope(raw: str) -> str:
    """Envelope extraction for markdown-formatted (image and audio) responses."""
    try:
        return extract_envelope(strip_code_fence(raw))
    except NoJsonDelimiters as exc:
        raise NoJsonDelimiters(exc.message, raw_text=raw) from None


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant {name!r}")


def parse_object(envelope: str, raw_text: str | None = None) -> dict[str, Any]:
    """
    Strictly parse an envelope into a JSON object.

    Args:
        envelope: Output of one of the extractors
        raw_text: Full model output, kept on the error for diagnosis

    Raises:
        ParseError: On any syntax error, nesting too deep to decode, or when
            the value is not an object
    """
    raw_text = envelope if raw_text is None else raw_text

    try:
        value = json.loads(envelope, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise ParseError(
            f"{exc.msg} (line {exc.lineno}, column {exc.colno})",
            raw_text=raw_text,
        ) from exc
    except ValueError as exc:
        raise ParseError(str(exc), raw_text=raw_text) from exc
    except RecursionError as exc:
        raise ParseError("JSON nesting too deep", raw_text=raw_text) from exc

    if not isinstance(value, dict):
        raise ParseError(
            f"Expected a JSON object, got {type(value).__name__}",
            raw_text=raw_text,
        )

    return value
