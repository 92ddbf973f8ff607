"""Error types raised while relaying a generation request."""

from __future__ import annotations

from fastapi import status


class ImageGenerationError(Exception):
    """Base class for failures that terminate a generation request."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Failed to generate image"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_body(self) -> dict[str, str]:
        return {"error": self.message}


class MissingInputError(ImageGenerationError):
    """A required request field is absent; raised before the provider is called."""

    status_code = status.HTTP_400_BAD_REQUEST


class ProviderError(ImageGenerationError):
    """The provider call raised."""


class UnexpectedOutputError(ImageGenerationError):
    default_message = "Unexpected response format from model"


class InvalidImageError(ImageGenerationError):
    default_message = "Invalid image URL generated"
