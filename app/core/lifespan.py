from contextlib import asynccontextmanager
import logging

from app.ai.config import load_ai_config
from app.ai.factory import build_ai_client
from app.core.config import settings
from app.services.job_synthesis import JobSynthesisEngine
from app.services.resume_analyzer import ResumeAnalyzer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    ai_client = build_ai_client(load_ai_config(settings))
    app.state.settings = settings
    app.state.ai_client = ai_client
    app.state.resume_analyzer = ResumeAnalyzer(ai_client)
    app.state.job_engine = JobSynthesisEngine(ai_client)
    logger.info("startup model_ready=%s provider=%s", ai_client is not None, settings.ai_provider)
    yield
