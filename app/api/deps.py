from fastapi import Request

from app.core.config import Settings
from app.services.job_synthesis import JobSynthesisEngine
from app.services.resume_analyzer import ResumeAnalyzer


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_resume_analyzer(request: Request) -> ResumeAnalyzer:
    return request.app.state.resume_analyzer


def get_job_engine(request: Request) -> JobSynthesisEngine:
    return request.app.state.job_engine
