"""
Analysis dispatcher: request in, normalized analysis out.

The dispatcher picks the request shape, calls the generative backend once,
and routes the raw text through extraction, parsing and normalization.
Only ``InvalidRequest`` and ``UpstreamError`` escape ``analyze``; output
that cannot be parsed becomes a fallback analysis.
"""

import time
from datetime import datetime, timezone

from loguru import logger

from scamcheck.analysis.models import AnalysisRequest
from scamcheck.config.settings import ScamCheckSettings
from scamcheck.exceptions import EmptyUpstreamResponse, NormalizationError, UpstreamError
from scamcheck.llm.gemini import GeminiClient, GenerativeBackend
from scamcheck.llm.prompts import render_prompt
from scamcheck.llm.schemas import AnalysisVariant, NormalizedAnalysis
from scamcheck.normalization.envelope import (
    extract_envelope,
    extract_fenced_envelope,
    parse_object,
)
from scamcheck.normalization.fallback import build_fallback
from scamcheck.normalization.fields import normalize
from scamcheck.observability.logging import (
    AnalysisAuditLogger,
    get_audit_logger,
    log_context,
)

_EXTRACTORS = {
    AnalysisVariant.TEXT: extract_envelope,
    AnalysisVariant.IMAGE: extract_fenced_envelope,
    AnalysisVariant.AUDIO: extract_fenced_envelope,
}


class AnalysisDispatcher:
    """
    Runs one scam analysis per call.

    Holds no per-request state, so one instance can serve concurrent
    requests.

    Example:
        ```python
        dispatcher = AnalysisDispatcher.from_settings(get_settings())
        result = await dispatcher.analyze(AnalysisRequest(text="You won!"))
        ```
    """

    def __init__(
        self,
        settings: ScamCheckSettings,
        backend: GenerativeBackend,
        audit_logger: AnalysisAuditLogger | None = None,
    ):
        self.settings = settings
        self.backend = backend
        self.audit_logger = audit_logger or get_audit_logger()

    @classmethod
    def from_settings(cls, settings: ScamCheckSettings) -> "AnalysisDispatcher":
        """Create a dispatcher backed by the Gemini API."""
        return cls(settings, GeminiClient(settings.gemini))

    async def analyze(self, request: AnalysisRequest) -> NormalizedAnalysis:
        """
        Analyze a request.

        Args:
            request: User submission

        Returns:
            Normalized analysis, possibly a ``Parsing Error`` fallback

        Raises:
            InvalidRequest: If the request has no text, image or audio
            UpstreamError: If the backend fails or returns no text
        """
        variant = request.select_variant()

        with log_context(variant=variant.value):
            start = time.perf_counter()
            prompt = render_prompt(
                variant,
                content=request.text or "",
                has_image=request.has_image,
            )
            attachments = request.attachments()

            logger.info(f"Starting {variant.value} analysis with {len(attachments)} attachment(s)")

            try:
                raw_text = await self.backend.invoke(prompt, attachments)
            except UpstreamError as e:
                self.audit_logger.log_error(
                    type(e).__name__, e.message, "dispatcher", status_code=e.status_code
                )
                raise

            if not raw_text or not raw_text.strip():
                self.audit_logger.log_error(
                    "EmptyUpstreamResponse", "No text content in AI response", "dispatcher"
                )
                raise EmptyUpstreamResponse("No text content found in AI response.")

            result = self.normalize_raw(raw_text, variant)
            if result.timestamp is None:
                result.timestamp = datetime.now(timezone.utc).isoformat()

            self.audit_logger.log_analysis(
                variant=variant.value,
                status=result.status.value,
                fallback=result.is_fallback,
                duration_ms=(time.perf_counter() - start) * 1000,
            )
            return result

    def normalize_raw(self, raw_text: str, variant: AnalysisVariant) -> NormalizedAnalysis:
        """
        Turn raw model output into an analysis; never raises.

        Extraction and parse failures produce a fallback that carries the
        raw text.
        """
        try:
            envelope = _EXTRACTORS[variant](raw_text)
            parsed = parse_object(envelope, raw_text)
        except NormalizationError as e:
            logger.warning(
                f"Could not parse {variant.value} response ({type(e).__name__}: {e.message}); "
                f"returning fallback for {len(raw_text)} chars of raw output"
            )
            return build_fallback(e, raw_text, variant)

        return normalize(
            parsed,
            variant,
            raw_text=raw_text,
            include_raw=self.settings.include_raw_response(),
        )

    async def close(self) -> None:
        """Release backend resources, if the backend holds any."""
        close = getattr(self.backend, "close", None)
        if close is not None:
            await close()
