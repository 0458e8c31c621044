"""
Gemini generative backend.

The dispatcher only depends on the ``GenerativeBackend`` protocol;
``GeminiClient`` is the production implementation talking to the
``generateContent`` REST endpoint.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Protocol, Sequence

import aiohttp
from loguru import logger

from scamcheck.config.settings import GeminiSettings
from scamcheck.exceptions import UpstreamError
from scamcheck.observability.logging import get_audit_logger


@dataclass(frozen=True)
class Attachment:
    """Binary input sent alongside the prompt."""

    mime_type: str
    data: str  # base64

    def to_part(self) -> dict[str, Any]:
        """Convert to a Gemini inline data part."""
        return {"inline_data": {"mime_type": self.mime_type, "data": self.data}}


class GenerativeBackend(Protocol):
    """Protocol for generative backend implementations."""

    async def invoke(self, prompt: str, attachments: Sequence[Attachment] = ()) -> str:
        """
        Send one prompt and return the raw text of the first candidate.

        Raises:
            UpstreamError: If the backend is unreachable, unconfigured or
                answers with a non-success status
        """
        ...


def build_payload(prompt: str, attachments: Sequence[Attachment] = ()) -> dict[str, Any]:
    """Build a single-turn generateContent request body."""
    parts: list[dict[str, Any]] = [{"text": prompt}]
    parts.extend(attachment.to_part() for attachment in attachments)
    return {"contents": [{"parts": parts}]}


def extract_candidate_text(data: Any) -> str:
    """Return the first candidate's first text part, or "" if there is none."""
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return ""
    content = candidates[0].get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return ""
    text = parts[0].get("text")
    return text if isinstance(text, str) else ""


class GeminiClient:
    """
    Client for the Gemini generateContent API.

    One aiohttp session is created lazily and reused; call ``close()``
    (or use the client as an async context manager) when done.
    """

    provider = "google"

    def __init__(self, settings: GeminiSettings):
        """
        Initialize Gemini client.

        Args:
            settings: Endpoint, model, credential and timeout
        """
        self.settings = settings
        self._session: aiohttp.ClientSession | None = None

    @property
    def endpoint(self) -> str:
        """generateContent URL for the configured model."""
        base_url = self.settings.base_url.rstrip("/")
        return f"{base_url}/models/{self.settings.model}:generateContent"

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.settings.timeout_seconds),
                headers={"Content-Type": "application/json"},
            )
        return self._session

    async def invoke(self, prompt: str, attachments: Sequence[Attachment] = ()) -> str:
        """
        Send a prompt with attachments and return the raw response text.

        Raises:
            UpstreamError: If the API key is missing, the request fails, or
                the API answers with a non-2xx status
        """
        if not self.settings.is_configured:
            raise UpstreamError("Gemini API key is not configured.")

        session = await self._get_session()
        payload = build_payload(prompt, attachments)
        params = {"key": self.settings.api_key.get_secret_value()}
        start = time.perf_counter()
        status_code = None
        success = False

        try:
            async with session.post(self.endpoint, json=payload, params=params) as response:
                status_code = response.status
                if not 200 <= response.status < 300:
                    body = await response.text()
                    logger.error(f"Gemini API error {response.status}: {body[:500]}")
                    raise UpstreamError(
                        f"Gemini API request failed with status {response.status}",
                        status_code=response.status,
                        body=body,
                    )
                data = await response.json(content_type=None)
            success = True

        except aiohttp.ClientError as e:
            raise UpstreamError(f"Gemini request failed: {str(e)}") from e
        except asyncio.TimeoutError as e:
            raise UpstreamError(
                f"Gemini request timed out after {self.settings.timeout_seconds}s"
            ) from e
        except ValueError as e:
            raise UpstreamError(
                "Gemini API returned a body that is not JSON", status_code=status_code
            ) from e
        finally:
            get_audit_logger().log_llm_request(
                provider=self.provider,
                model=self.settings.model,
                duration_ms=(time.perf_counter() - start) * 1000,
                success=success,
                status_code=status_code,
                attachments=len(attachments),
            )

        return extract_candidate_text(data)

    async def close(self) -> None:
        """Close the underlying session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "GeminiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
