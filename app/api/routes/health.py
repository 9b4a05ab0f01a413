from fastapi import APIRouter, Depends

from app.api.deps import get_job_engine
from app.schemas.resume import HealthResponse
from app.services.job_synthesis import JobSynthesisEngine

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Report service status and whether the AI model is configured.",
)
async def health_check(engine: JobSynthesisEngine = Depends(get_job_engine)):
    return HealthResponse(status="ok", model_ready=engine.model_ready)
