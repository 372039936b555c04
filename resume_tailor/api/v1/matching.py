from fastapi import APIRouter, Header, Request, status
from fastapi.responses import JSONResponse

from resume_tailor.core.config import settings
from resume_tailor.core.errors import MalformedDraftError
from resume_tailor.core.rate_limit import rate_limit
from resume_tailor.core.security import check_api_key
from resume_tailor.features.keyword_extractor import build_job_posting
from resume_tailor.schemas import (
    ErrorResponse,
    JobPosting,
    KeywordsRequest,
    ReconcileRequest,
    ScoreRequest,
    ScoreResponse,
    TailoringResult,
)
from resume_tailor.services.tailoring_service import finalize_tailoring, preview_score

router = APIRouter()


@router.post("/keywords", response_model=JobPosting)
@rate_limit()
async def extract_job_keywords(
    request: Request,
    payload: KeywordsRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    return build_job_posting(payload.job_text, title=payload.title, company_name=payload.company_name)


@router.post("/score", response_model=ScoreResponse)
@rate_limit()
async def score_resume_for_job(
    request: Request,
    payload: ScoreRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    result = preview_score(payload.job_text, payload.resume)
    return ScoreResponse(available=result is not None, result=result)


@router.post(
    "/tailor/reconcile",
    response_model=TailoringResult,
    responses={status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": ErrorResponse}},
)
@rate_limit(settings.reconcile_rate_limit)
async def reconcile_tailored_resume(
    request: Request,
    payload: ReconcileRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    try:
        return finalize_tailoring(payload.base_resume, payload.job_text, payload.draft)
    except MalformedDraftError as exc:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=ErrorResponse(code=exc.code, message=exc.message).model_dump(),
        )
