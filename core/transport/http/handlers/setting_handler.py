from __future__ import annotations

from typing import Dict

from fastapi import APIRouter, Request

from core.service.settings_service import EnvSettingsService


router = APIRouter()


@router.get("/settings", summary="Current server settings")
async def get_settings(request: Request) -> Dict[str, str]:
    settings = getattr(request.app.state, "settings", None) or EnvSettingsService()
    data = settings.public()
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is not None:
        await pipeline.llm.is_available()
        data["LLM_STATUS"] = pipeline.llm.status_message
    return data
