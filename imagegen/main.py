"""FastAPI entry point exposing the image generator page and relay API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Form, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.concurrency import run_in_threadpool

from .aiservices.replicateimagegenerationclient import ReplicateImageGenerationClient
from .catalog import DEFAULT_MODEL, MODEL_CATALOG
from .config import get_settings
from .errors import ImageGenerationError
from .schemas import (
    ErrorResponse,
    GenerationRequest,
    GenerationResponse,
    ModelCatalogResponse,
    ModelInfo,
)
from .service import ImageRelayService, relay_transport
from .view import GeneratorView

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    # The provider client is built once here and shared by every request.
    app.state.image_service = ImageRelayService(ReplicateImageGenerationClient(settings), settings)
    logger.info("Image relay ready (default model %s)", settings.default_model)
    yield
    del app.state.image_service


def get_image_service(request: Request) -> ImageRelayService:
    return request.app.state.image_service


app = FastAPI(title="Sportgeeks Image Generator", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ImageGenerationError)
async def image_generation_error_handler(request: Request, exc: ImageGenerationError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body"},
    )


@app.get("/health", summary="Health Check Endpoint")
async def healthcheck():
    settings = get_settings()
    return {
        "status": "ok",
        "defaultModel": settings.default_model,
        "requireModel": settings.require_model,
    }


@app.get(
    "/api/models",
    response_model=ModelCatalogResponse,
    summary="List the models offered by the generator page",
)
async def list_models():
    return ModelCatalogResponse(
        models=[
            ModelInfo(
                id=spec.id,
                name=spec.name,
                aspectRatio=spec.aspect_ratio,
                defaults=dict(spec.defaults),
            )
            for spec in MODEL_CATALOG
        ]
    )


@app.post(
    "/api/generate-image",
    response_model=GenerationResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Generate an image from a prompt on a hosted model",
)
async def generate_image(
    payload: GenerationRequest,
    service: ImageRelayService = Depends(get_image_service),
):
    image = await run_in_threadpool(service.generate_image, payload)
    return GenerationResponse(imageUrl=image.url)


@app.get("/", response_class=HTMLResponse, summary="Generator page")
async def generator_page(model: str = DEFAULT_MODEL.id):
    return HTMLResponse(GeneratorView(model=model).render())


@app.post("/", response_class=HTMLResponse, summary="Submit the generator form")
async def submit_generator(
    prompt: str = Form(""),
    model: str = Form(DEFAULT_MODEL.id),
    details: bool = Form(False),
    service: ImageRelayService = Depends(get_image_service),
):
    view = GeneratorView(prompt=prompt, model=model, show_details=details)
    await run_in_threadpool(view.submit, relay_transport(service))
    return HTMLResponse(view.render())


__all__ = ["app"]


if __name__ == "__main__":  # pragma: no cover - convenience entry point
    import uvicorn

    uvicorn.run("imagegen.main:app", host="0.0.0.0", port=8000, reload=True)
