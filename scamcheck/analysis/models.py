"""
Analysis request model.
"""

import re

from pydantic import BaseModel, Field, model_validator

from scamcheck.exceptions import InvalidRequest
from scamcheck.llm.gemini import Attachment
from scamcheck.llm.schemas import AnalysisVariant

_DATA_URL = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[\w=.+-]+)*;base64,", re.IGNORECASE)


def _split_data_url(value: str | None) -> tuple[str | None, str | None]:
    """Split ``data:image/png;base64,AAAA`` into its MIME type and payload."""
    if value is None:
        return None, None
    match = _DATA_URL.match(value)
    if not match:
        return None, value
    return match.group("mime"), value[match.end():]


class AnalysisRequest(BaseModel):
    """
    One user submission: text, an image, an audio clip, or a mix.

    Binary inputs are base64 strings; browser data URLs are accepted and
    their MIME type is used in place of the default.
    """

    text: str | None = Field(None, description="Text to analyze")
    image: str | None = Field(None, description="Base64-encoded image")
    audio: str | None = Field(None, description="Base64-encoded audio clip")
    image_mime_type: str = "image/jpeg"
    audio_mime_type: str = "audio/webm"

    @model_validator(mode="after")
    def unwrap_data_urls(self) -> "AnalysisRequest":
        """Strip data URL prefixes from binary inputs."""
        mime, self.image = _split_data_url(self.image)
        if mime:
            self.image_mime_type = mime
        mime, self.audio = _split_data_url(self.audio)
        if mime:
            self.audio_mime_type = mime
        return self

    @property
    def has_text(self) -> bool:
        return bool(self.text and self.text.strip())

    @property
    def has_image(self) -> bool:
        return bool(self.image and self.image.strip())

    @property
    def has_audio(self) -> bool:
        return bool(self.audio and self.audio.strip())

    def select_variant(self) -> AnalysisVariant:
        """
        Pick the request shape: audio first, then image, then text.

        Raises:
            InvalidRequest: If no input is present
        """
        if self.has_audio:
            return AnalysisVariant.AUDIO
        if self.has_image:
            return AnalysisVariant.IMAGE
        if self.has_text:
            return AnalysisVariant.TEXT
        raise InvalidRequest(
            "Content is required: provide text, an image, or an audio clip."
        )

    def attachments(self) -> list[Attachment]:
        """All binary inputs, tagged with their MIME types."""
        attachments = []
        if self.has_image:
            attachments.append(Attachment(mime_type=self.image_mime_type, data=self.image.strip()))
        if self.has_audio:
            attachments.append(Attachment(mime_type=self.audio_mime_type, data=self.audio.strip()))
        return attachments
