"""Fixed catalog of hosted models offered by the generator page."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class ModelSpec:
    id: str
    name: str
    aspect_ratio: str
    defaults: Mapping[str, Any] = field(default_factory=dict)

    def build_input(self, prompt: str) -> Dict[str, Any]:
        """Return the provider input this model is run with for ``prompt``."""
        return {"prompt": prompt, **self.defaults}

    @property
    def css_aspect_ratio(self) -> str:
        width, _, height = self.aspect_ratio.partition(":")
        return f"{width} / {height}"


MODEL_CATALOG: Tuple[ModelSpec, ...] = (
    ModelSpec(
        id="black-forest-labs/flux-schnell",
        name="Flux Schnell",
        aspect_ratio="1:1",
        defaults=MappingProxyType({
            "go_fast": True,
            "megapixels": "1",
            "num_outputs": 1,
            "aspect_ratio": "1:1",
            "output_format": "webp",
            "output_quality": 80,
            "num_inference_steps": 4,
        }),
    ),
    ModelSpec(
        id="stability-ai/stable-diffusion-3.5-large",
        name="Stable Diffusion 3.5 Large",
        aspect_ratio="3:2",
        defaults=MappingProxyType({
            "cfg": 3.5,
            "steps": 28,
            "aspect_ratio": "3:2",
            "output_format": "webp",
            "output_quality": 90,
            "prompt_strength": 0.85,
        }),
    ),
    ModelSpec(
        id="recraft-ai/recraft-v3",
        name="Recraft V3",
        aspect_ratio="4:3",
        defaults=MappingProxyType({
            "size": "1365x1024",
            "style": "any",
        }),
    ),
)

DEFAULT_MODEL = MODEL_CATALOG[0]

_BY_ID = {spec.id: spec for spec in MODEL_CATALOG}


def get_model_spec(model_id: Optional[str]) -> ModelSpec:
    """Look up ``model_id``; unknown or empty ids resolve to the default model."""
    if not model_id:
        return DEFAULT_MODEL
    return _BY_ID.get(model_id, DEFAULT_MODEL)
