"""Relay logic between incoming generation requests and the hosted provider."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping

from pydantic import ValidationError

from .aiservices.imagegenerationclient import ImageGenerationClient
from .aiservices.provideroutput import ImageReference, decode_provider_output, to_image_reference
from .config import Settings, get_settings
from .errors import ImageGenerationError, MissingInputError, ProviderError
from .schemas import GenerationRequest

logger = logging.getLogger(__name__)


class ImageRelayService:
    """Validates a request, runs it on the provider once and normalizes the output."""

    def __init__(self, client: ImageGenerationClient, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self._client = client

    # ------------------------------------------------------------------
    # Image Generation
    # ------------------------------------------------------------------
    def generate_image(self, request: GenerationRequest) -> ImageReference:
        model = self._resolve_model(request)
        if not request.prompt or not request.prompt.strip():
            logger.warning("Rejected generation request without a prompt")
            raise MissingInputError("Prompt is required")

        params = request.provider_input()
        try:
            raw = self._client.run(model, params)
        except ImageGenerationError:
            raise
        except Exception as exc:
            logger.exception("Image generation failed for model '%s'", model)
            raise ProviderError(str(exc) or None) from exc

        try:
            return to_image_reference(decode_provider_output(raw))
        except ImageGenerationError as exc:
            logger.warning("Model '%s' returned unusable output (%s): %r", model, exc.message, raw)
            raise

    def _resolve_model(self, request: GenerationRequest) -> str:
        if request.model:
            return request.model
        if self.settings.require_model:
            logger.warning("Rejected generation request without a model")
            raise MissingInputError("Model is required")
        return self.settings.default_model


# ----------------------------------------------------------------------
# In-process transport used by the server-rendered generator page
# ----------------------------------------------------------------------
@dataclass
class RelayReply:
    status_code: int
    body: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


RelayTransport = Callable[[Mapping[str, Any]], RelayReply]


def relay_transport(service: ImageRelayService) -> RelayTransport:
    """Return a transport that answers exactly like ``POST /api/generate-image``."""

    def send(payload: Mapping[str, Any]) -> RelayReply:
        try:
            request = GenerationRequest.model_validate(dict(payload))
        except ValidationError:
            return RelayReply(status_code=400, body={"error": "Invalid request body"})
        try:
            image = service.generate_image(request)
        except ImageGenerationError as exc:
            return RelayReply(status_code=exc.status_code, body=exc.to_body())
        return RelayReply(status_code=200, body={"imageUrl": image.url})

    return send
