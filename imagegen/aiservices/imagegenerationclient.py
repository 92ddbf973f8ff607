from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

class ImageGenerationClient(ABC):
    """Abstract interface for a hosted image generation provider.

    Implementations block until the provider has produced its output and
    return it untouched; shape normalization happens in the relay service.
    """


    @abstractmethod
    def run(self, model: str, params: Mapping[str, Any]) -> Any:
        """Run ``model`` with ``params`` as its input and return the raw output."""
