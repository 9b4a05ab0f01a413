from __future__ import annotations


class AIClientError(RuntimeError):
    def __init__(self, message: str, *, code: str = "ai_error"):
        super().__init__(message)
        self.code = code


class ModelUnavailable(AIClientError):
    def __init__(self, message: str = "AI model is not configured. Provide a valid API key."):
        super().__init__(message, code="model_unavailable")


class EmptyResponse(AIClientError):
    def __init__(self, message: str = "AI model returned an empty response."):
        super().__init__(message, code="empty_response")


class MalformedResponse(AIClientError):
    def __init__(self, message: str = "Unable to locate JSON block in AI response."):
        super().__init__(message, code="malformed_response")
