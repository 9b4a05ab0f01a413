from dataclasses import dataclass

from app.core.config import Settings


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    api_key: str | None
    base_url: str | None = None
    timeout_s: float = 30.0
    temperature: float = 0.4


def load_ai_config(settings: Settings) -> AIConfig:
    return AIConfig(
        provider=settings.ai_provider,
        model=settings.ai_model,
        api_key=settings.ai_api_key,
        base_url=settings.ai_base_url,
        timeout_s=settings.ai_timeout_s,
        temperature=settings.ai_temperature,
    )
