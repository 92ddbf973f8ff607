# clients/replicateimagegenerationclient.py
from __future__ import annotations
from typing import Any, Mapping, Optional
import logging

import replicate

from ..config import Settings, get_settings
from .imagegenerationclient import ImageGenerationClient

logger = logging.getLogger(__name__)


class ReplicateImageGenerationClient(ImageGenerationClient):
    """
    Runs hosted models on Replicate.

    One instance is built at application startup and shared by every request;
    the underlying ``replicate.Client`` holds no per-request state.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()

        api_token = self.settings.replicate_api_token.get_secret_value()
        if not api_token:
            logger.warning("No Replicate API token configured; generation requests will fail")

        # None lets the SDK fall back to its own environment lookup
        self._client = replicate.Client(api_token=api_token or None)

    def run(self, model: str, params: Mapping[str, Any]) -> Any:
        logger.info("Running model %s", model)
        # Plain URLs rather than FileOutput objects keep the output shapes
        # limited to sequences, strings and mappings.
        return self._client.run(model, input=dict(params), use_file_output=False)
