from __future__ import annotations

from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from .router import api_router
from core.domain.schemas.specialty import MedicalSpecialty
from core.service.pipeline_service import PipelineService
from core.service.settings_service import EnvSettingsService


def create_app(settings: Optional[EnvSettingsService] = None, pipeline: Optional[PipelineService] = None) -> FastAPI:
    load_dotenv()
    settings = settings or EnvSettingsService()

    swagger_enabled = settings.get_bool("SWAGGER_ENABLED", True)
    docs_url = "/docs" if swagger_enabled else None
    redoc_url = "/redoc" if swagger_enabled else None

    app = FastAPI(
        title="Triage Parser API",
        version="0.1.0",
        docs_url=docs_url,
        redoc_url=redoc_url,
        openapi_url="/openapi.json" if swagger_enabled else None,
    )

    # CORS
    raw_origins = settings.get("ALLOWED_CORS_ORIGINS", "*")
    origins: List[str] = [o.strip() for o in raw_origins.split(",") if o.strip()] or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(api_router)

    @app.get("/health", tags=["health"])  # simple health endpoint
    def health() -> dict:
        return {"status": "ok"}

    # One stateless pipeline shared by all requests.
    app.state.settings = settings
    app.state.pipeline = pipeline or PipelineService(settings)
    app.state.default_specialty = MedicalSpecialty.from_loose(settings.get("DEFAULT_SPECIALTY"))

    return app


app = create_app()
