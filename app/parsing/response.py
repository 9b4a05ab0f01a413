from __future__ import annotations

import json
from typing import Any

from app.ai.errors import EmptyResponse, MalformedResponse


def parse_embedded_json(text: str | None) -> dict[str, Any]:
    """Parse the JSON object spanning the first ``{`` to the last ``}`` of ``text``.

    Model output often wraps JSON in prose or markdown fences, so everything
    outside that span is ignored. Unrelated braces in the surrounding prose
    widen the span and make the parse fail; that is a known limitation.
    """
    if not text or not text.strip():
        raise EmptyResponse()

    first = text.find("{")
    last = text.rfind("}")
    if first == -1 or last == -1 or last <= first:
        raise MalformedResponse()

    try:
        parsed = json.loads(text[first : last + 1])
    except json.JSONDecodeError as exc:
        raise MalformedResponse(f"AI response contained invalid JSON: {exc.msg}") from exc

    if not isinstance(parsed, dict):
        raise MalformedResponse("AI response JSON is not an object.")
    return parsed
