from __future__ import annotations

from fastapi import APIRouter

from .handlers.parse_handler import router as parse_router
from .handlers.setting_handler import router as settings_router


api_router = APIRouter()
api_router.include_router(parse_router, prefix="/api", tags=["parsing"])
api_router.include_router(settings_router, prefix="/api", tags=["settings"])
