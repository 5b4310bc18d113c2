from __future__ import annotations

import os
from typing import Any, Dict, Mapping, Optional

from core.domain.ports.Settings_provider import Settings_provider
from core.lib.logger import get_logger


# Keys that are safe to report back to clients.
PUBLIC_KEYS = (
    "DOMAIN",
    "PORT",
    "ALLOWED_CORS_ORIGINS",
    "SWAGGER_ENABLED",
    "LLM_ENABLED",
    "OLLAMA_HOST",
    "OLLAMA_MODEL",
    "LLM_TIMEOUT_S",
    "DEFAULT_SPECIALTY",
    "LOG_LEVEL",
)


class EnvSettingsService(Settings_provider):
    """Settings backed by environment variables.

    Entry points call ``load_dotenv()`` before constructing this, so values
    from a local ``.env`` file are visible here as well. An explicit mapping
    can be passed instead of the process environment (used by tests).
    """

    def __init__(self, source: Optional[Mapping[str, str]] = None) -> None:
        self._source = source
        self.logger = get_logger("settings")

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        if self._source is not None:
            return self._source.get(key, default)
        return os.getenv(key, default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        v = self.get(key)
        if v is None:
            return default
        return str(v).lower() in ("1", "true", "yes")

    def get_int(self, key: str, default: int) -> int:
        v = self.get(key)
        if v is None or v == "":
            return default
        try:
            return int(v)
        except ValueError:
            self.logger.warning("invalid int for %s=%r, using %d", key, v, default)
            return default

    def get_float(self, key: str, default: float) -> float:
        v = self.get(key)
        if v is None or v == "":
            return default
        try:
            return float(v)
        except ValueError:
            self.logger.warning("invalid float for %s=%r, using %s", key, v, default)
            return default

    def public(self) -> Dict[str, str]:
        return {k: str(self.get(k, "") or "") for k in PUBLIC_KEYS}
