from typing import Protocol


class AIClient(Protocol):
    """Text in, text out. Implementations may raise ``AIClientError`` or transport errors."""

    model: str

    async def generate(self, prompt: str) -> str: ...
