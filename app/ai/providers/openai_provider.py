from __future__ import annotations

from typing import Optional

from openai import AsyncOpenAI

from app.ai.errors import EmptyResponse, ModelUnavailable


class OpenAIProvider:
    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 30.0,
        max_retries: int = 0,
        temperature: float = 0.4,
    ):
        self.model = model
        self._temperature = temperature
        key = (api_key or "").strip()
        if not key:
            raise ModelUnavailable("OPENAI_API_KEY is missing")

        self._client = AsyncOpenAI(
            api_key=key,
            base_url=base_url or None,
            timeout=timeout_s,
            max_retries=max_retries,
        )

    async def generate(self, prompt: str) -> str:
        response = await self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self._temperature,
        )
        content = response.choices[0].message.content if response.choices else ""
        if not content or not content.strip():
            raise EmptyResponse()
        return content
