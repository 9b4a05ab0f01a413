from __future__ import annotations

from app.core.config import Settings, settings


def cors_allowed_origins(config: Settings = settings) -> list[str]:
    return [origin for origin in config.cors_allowed_origins if origin]
