from __future__ import annotations

import logging
from typing import Any

from app.ai.errors import ModelUnavailable
from app.ai.types import AIClient
from app.normalize.coerce import coerce_job_queries, coerce_str, coerce_str_list
from app.parsing.response import parse_embedded_json
from app.schemas.resume import AnalysisResult

logger = logging.getLogger(__name__)

MAX_RESUME_LENGTH = 8000
SNIPPET_LENGTH = 1000
TRUNCATION_MARKER = "..."


def truncate_content(content: str | None, limit: int = MAX_RESUME_LENGTH) -> str:
    if not content:
        return ""
    if len(content) <= limit:
        return content
    return f"{content[:limit]}{TRUNCATION_MARKER}"


def resume_snippet(content: str | None) -> str:
    return truncate_content(content)[:SNIPPET_LENGTH]


def build_analysis_prompt(resume_text: str, custom_prompt: str | None = None) -> str:
    guidance = (custom_prompt or "").strip() or "None provided"
    instruction = (
        "You are an expert career coach and recruiter. Analyze the candidate resume below and respond strictly "
        "with minified JSON using this schema:\n"
        "{\n"
        '  "summary": string,\n'
        '  "keywords": string[6-10],\n'
        '  "strengths": string[4-6],\n'
        '  "nextSteps": string[3-5],\n'
        '  "jobQueries": Array<{"title": string, "query": string}>\n'
        "}\n"
        "Requirements:\n"
        "- Summary <= 3 sentences, energetic and specific.\n"
        "- Keywords should be ATS-friendly hard skills and industry terms.\n"
        "- Strengths should highlight differentiators (achievements, domains, leadership, etc.).\n"
        "- Next steps must be short imperatives tailored to the candidate.\n"
        "- jobQueries should contain 3-4 targeted search queries blending seniority, domain, and skills.\n"
        f"- Consider candidate priorities: {guidance}\n"
        "- Output ONLY JSON. No markdown, no commentary."
    )
    resume_block = f"RESUME CONTENT START\n{truncate_content(resume_text)}\nRESUME CONTENT END"
    return f"{instruction}\n\n{resume_block}"


def decode_analysis(payload: dict[str, Any]) -> AnalysisResult:
    return AnalysisResult(
        summary=coerce_str(payload.get("summary")).strip(),
        keywords=coerce_str_list(payload.get("keywords")),
        strengths=coerce_str_list(payload.get("strengths")),
        next_steps=coerce_str_list(payload.get("nextSteps")),
        job_queries=coerce_job_queries(payload.get("jobQueries")),
    )


class ResumeAnalyzer:
    def __init__(self, ai_client: AIClient | None):
        self._ai_client = ai_client

    async def analyze(self, resume_text: str, custom_prompt: str | None = None) -> AnalysisResult:
        if self._ai_client is None:
            raise ModelUnavailable()

        prompt = build_analysis_prompt(resume_text, custom_prompt)
        text = await self._ai_client.generate(prompt)
        result = decode_analysis(parse_embedded_json(text))
        logger.info(
            "resume_analysis_ok resume_len=%s keywords=%s job_queries=%s",
            len(resume_text),
            len(result.keywords),
            len(result.job_queries),
        )
        return result
