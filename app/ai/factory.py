import logging

from app.ai.config import AIConfig
from app.ai.types import AIClient

from app.ai.providers.openai_provider import OpenAIProvider
from app.ai.providers.gemini_provider import GeminiProvider

logger = logging.getLogger(__name__)


def create_ai_client(cfg: AIConfig) -> AIClient:
    if cfg.provider == "openai":
        return OpenAIProvider(
            model=cfg.model,
            api_key=cfg.api_key,
            base_url=cfg.base_url,
            timeout_s=cfg.timeout_s,
            temperature=cfg.temperature,
        )

    if cfg.provider == "gemini":
        return GeminiProvider(
            model=cfg.model,
            api_key=cfg.api_key,
            timeout_s=cfg.timeout_s,
            temperature=cfg.temperature,
        )

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")


def build_ai_client(cfg: AIConfig) -> AIClient | None:
    """Build the process-wide client, or ``None`` when the model cannot be used."""
    if not cfg.api_key:
        logger.warning("ai_client_unconfigured provider=%s: missing API key", cfg.provider)
        return None
    try:
        client = create_ai_client(cfg)
    except Exception as exc:  # noqa: BLE001 - app must boot without a model
        logger.error("ai_client_init_failed provider=%s model=%s: %s", cfg.provider, cfg.model, exc)
        return None
    logger.info("ai_client_ready provider=%s model=%s", cfg.provider, cfg.model)
    return client
