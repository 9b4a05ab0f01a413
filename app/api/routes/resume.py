import asyncio
import base64
import binascii
import logging

from fastapi import APIRouter, Depends, status

from app.ai.errors import AIClientError
from app.api.deps import get_resume_analyzer, get_settings
from app.api.errors import ApiError
from app.core.config import Settings
from app.parsing.parse import TextExtractionError, UnsupportedFormat, extract_resume_text
from app.schemas.resume import AnalyzeResumeRequest, AnalyzeResumeResponse
from app.services.resume_analyzer import ResumeAnalyzer, resume_snippet

logger = logging.getLogger(__name__)

router = APIRouter()

ANALYSIS_FAILED = "Failed to analyze resume."


def _decode_payload(base64_data: str, max_bytes: int) -> bytes:
    data = base64_data.strip()
    if data.startswith("data:") and "," in data:
        data = data.split(",", 1)[1]
    # base64 inflates by 4/3; reject before decoding anything huge.
    if len(data) > (max_bytes * 4) // 3 + 4:
        raise ApiError(
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            f"Resume too large. Maximum allowed size is {max_bytes // (1024 * 1024)} MB.",
        )
    try:
        return base64.b64decode(data, validate=False)
    except (binascii.Error, ValueError) as exc:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Unable to decode resume payload.") from exc


@router.post(
    "/analyze-resume",
    response_model=AnalyzeResumeResponse,
    summary="Analyze Resume",
    description="Extract text from an uploaded resume and return an AI career analysis.",
)
async def analyze_resume(
    payload: AnalyzeResumeRequest,
    analyzer: ResumeAnalyzer = Depends(get_resume_analyzer),
    config: Settings = Depends(get_settings),
):
    if not payload.file_name.strip() or not payload.file_type.strip() or not payload.base64_data.strip():
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Missing resume payload.")

    content = _decode_payload(payload.base64_data, config.max_upload_bytes)

    try:
        extracted = await asyncio.to_thread(extract_resume_text, payload.file_type, content)
    except (UnsupportedFormat, TextExtractionError) as exc:
        logger.warning("resume_extraction_failed file_type=%s: %s", payload.file_type, exc)
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, ANALYSIS_FAILED, details=str(exc)) from exc

    resume_text = extracted.text
    if not resume_text.strip():
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Unable to read text from the provided resume.")

    try:
        analysis = await analyzer.analyze(resume_text, payload.custom_prompt)
    except AIClientError as exc:
        logger.warning("resume_analysis_failed code=%s: %s", exc.code, exc)
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, ANALYSIS_FAILED, details=str(exc)) from exc
    except Exception as exc:  # noqa: BLE001 - transport failures surface as a generic 500
        logger.exception("resume_analysis_failed")
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, ANALYSIS_FAILED, details=str(exc)) from exc

    return AnalyzeResumeResponse(resume_text_snippet=resume_snippet(resume_text), analysis=analysis)
