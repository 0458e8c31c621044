"""
ScamCheck exceptions.

Only ``InvalidRequest`` and ``UpstreamError`` (with its subclass
``EmptyUpstreamResponse``) ever leave the analysis dispatcher. The
normalization errors are raised internally and always converted into a
fallback analysis.
"""


class ScamCheckError(Exception):
    """Base exception for all ScamCheck errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidRequest(ScamCheckError):
    """Raised when a request carries no usable text, image or audio."""
    pass


class UpstreamError(ScamCheckError):
    """Raised when the generative backend is unreachable, misconfigured or fails."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
        details: dict | None = None
    ):
        super().__init__(message, details)
        self.status_code = status_code
        self.body = body


class EmptyUpstreamResponse(UpstreamError):
    """Raised when the backend answered successfully but with no text."""
    pass


class NormalizationError(ScamCheckError):
    """Raised when raw model output cannot be read as a JSON object."""

    def __init__(self, message: str, raw_text: str, details: dict | None = None):
        super().__init__(message, details)
        self.raw_text = raw_text


class NoJsonDelimiters(NormalizationError):
    """Raised when the raw output has no ``{ ... }`` span."""
    pass


class ParseError(NormalizationError):
    """Raised when the extracted envelope is not valid JSON."""
    pass
