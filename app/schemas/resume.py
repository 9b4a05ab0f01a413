from __future__ import annotations

from pydantic import Field

from app.schemas.jobs import CamelModel, JobQuery


class AnalysisResult(CamelModel):
    summary: str = ""
    keywords: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list)
    job_queries: list[JobQuery] = Field(default_factory=list)


class AnalyzeResumeRequest(CamelModel):
    file_name: str = ""
    file_type: str = ""
    base64_data: str = ""
    custom_prompt: str | None = None


class AnalyzeResumeResponse(CamelModel):
    resume_text_snippet: str
    analysis: AnalysisResult


class HealthResponse(CamelModel):
    status: str
    model_ready: bool
