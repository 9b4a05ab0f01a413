from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

_PLACEHOLDER_PREFIXES = ("your_", "replace_")
_PLACEHOLDER_VALUES = {"changeme", "todo"}


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith(_PLACEHOLDER_PREFIXES) or lower in _PLACEHOLDER_VALUES


def _first_env(*names: str) -> str | None:
    """Return the first non-empty, non-placeholder value among ``names``."""
    for name in names:
        value = (_get_env(name) or "").strip()
        if value and not _looks_like_placeholder(value):
            return value
    return None


# Legacy variable names are read in priority order.
AI_KEY_ENV_NAMES = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_GEMINI_API_KEY", "GOOGLE_API_KEY"),
    "openai": ("OPENAI_API_KEY",),
}
AI_MODEL_ENV_NAMES = {
    "gemini": ("AI_MODEL", "GEMINI_MODEL"),
    "openai": ("AI_MODEL", "OPENAI_MODEL"),
}
AI_DEFAULT_MODELS = {
    "gemini": "gemini-2.0-flash",
    "openai": "gpt-4o-mini",
}


@dataclass(frozen=True)
class Settings:
    api_port: int
    cors_allowed_origins: tuple[str, ...]
    ai_provider: str
    ai_model: str
    ai_api_key: str | None
    ai_base_url: str | None
    ai_timeout_s: float
    ai_temperature: float
    max_upload_bytes: int
    log_level: str
    sentry_dsn: str | None
    docs_enabled: bool


def load_settings() -> Settings:
    provider = (_get_env("AI_PROVIDER", "gemini") or "gemini").strip().lower()
    model = _first_env(*AI_MODEL_ENV_NAMES.get(provider, ("AI_MODEL",))) or AI_DEFAULT_MODELS.get(provider, "")
    return Settings(
        api_port=_get_env_int("API_PORT", _get_env_int("PORT", 5174)),
        cors_allowed_origins=_get_env_list(
            "CORS_ALLOWED_ORIGINS",
            list(_get_env_list("CLIENT_ORIGIN", ["http://localhost:5173"])),
        ),
        ai_provider=provider,
        ai_model=model,
        ai_api_key=_first_env(*AI_KEY_ENV_NAMES.get(provider, ())),
        ai_base_url=_get_env("OPENAI_BASE_URL"),
        ai_timeout_s=_get_env_float("AI_TIMEOUT_S", 30.0),
        ai_temperature=_get_env_float("AI_TEMPERATURE", 0.4),
        max_upload_bytes=_get_env_int("MAX_UPLOAD_BYTES", 12 * 1024 * 1024),
        log_level=(_get_env("LOG_LEVEL", "INFO") or "INFO").upper(),
        sentry_dsn=_get_env("SENTRY_DSN"),
        docs_enabled=_get_env_bool("DOCS_ENABLED", True),
    )


settings = load_settings()

if settings.ai_provider not in AI_KEY_ENV_NAMES:
    raise RuntimeError("AI_PROVIDER must be either 'gemini' or 'openai'.")
