"""Pydantic models shared by the FastAPI endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class GenerationRequest(BaseModel):
    """Relay request body; any field besides ``model`` is forwarded to the provider."""

    model_config = ConfigDict(extra="allow", protected_namespaces=())

    # Both optional here so that a missing value is reported as 400 by the
    # relay service rather than 422 by request validation.
    model: Optional[str] = Field(default=None, description="Hosted model identifier")
    prompt: Optional[str] = Field(default=None, description="Text prompt for image generation")

    def provider_input(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {"prompt": self.prompt}
        params.update(self.model_extra or {})
        return params


class GenerationResponse(BaseModel):
    imageUrl: str = Field(..., description="URL of the generated image")


class ErrorResponse(BaseModel):
    error: str


class ModelInfo(BaseModel):
    id: str
    name: str
    aspectRatio: str
    defaults: Dict[str, Any]


class ModelCatalogResponse(BaseModel):
    models: List[ModelInfo]
