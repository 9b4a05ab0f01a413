import logging

from fastapi import APIRouter, Depends, status

from app.api.deps import get_job_engine
from app.api.errors import ApiError
from app.normalize.coerce import coerce_job_queries
from app.schemas.jobs import JobSearchRequest, JobSearchResponse
from app.services.job_synthesis import JobSynthesisEngine

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/jobs/search",
    response_model=JobSearchResponse,
    response_model_exclude_none=True,
    summary="Search Jobs",
    description="Turn job queries into postings with job-board deep links.",
)
async def search_jobs(
    payload: JobSearchRequest,
    engine: JobSynthesisEngine = Depends(get_job_engine),
):
    queries = coerce_job_queries(payload.queries)
    if not queries:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Provide at least one job query.")

    try:
        jobs = await engine.synthesize_jobs(queries, location=payload.location, remote=bool(payload.remote))
    except Exception as exc:  # noqa: BLE001 - only unexpected internal errors reach here
        logger.exception("job_search_failed queries=%s", len(queries))
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch job listings.", details=str(exc)
        ) from exc
    return JobSearchResponse(jobs=jobs)
