from __future__ import annotations

from typing import Optional

from google import genai
from google.genai import types

from app.ai.errors import EmptyResponse, ModelUnavailable


class GeminiProvider:
    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        timeout_s: float = 30.0,
        temperature: float = 0.4,
    ):
        self.model = model
        key = (api_key or "").strip()
        if not key:
            raise ModelUnavailable("GEMINI_API_KEY is missing")

        self._config = types.GenerateContentConfig(temperature=temperature)
        self._client = genai.Client(
            api_key=key,
            http_options=types.HttpOptions(timeout=int(timeout_s * 1000)),
        )

    async def generate(self, prompt: str) -> str:
        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=self._config,
        )
        text = getattr(response, "text", None)
        if not text or not text.strip():
            raise EmptyResponse("Gemini returned an empty response.")
        return text
