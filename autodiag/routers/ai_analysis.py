import math
import time

from fastapi import APIRouter, Depends, HTTPException  # type: ignore
from fastapi.concurrency import run_in_threadpool  # type: ignore

from autodiag.agent.ai_analysis import get_llm, run_ai_analysis
from autodiag.auth.auth import get_current_user_id
from autodiag.config import AI_MAX_REQUESTS_PER_HOUR
from autodiag.errors import (
    AIQuotaExceeded,
    AIServiceError,
    AIServiceUnavailable,
    RateLimitExceeded,
)
from autodiag.models.ai_analysis import AIAnalysisResponse
from autodiag.models.diagnostic import DiagnosticForm
from autodiag.services.rate_limiter import RateLimiter

router = APIRouter(
    prefix="/diagnostics",
    tags=["AI Analysis"]
)

limiter = RateLimiter(max_requests=AI_MAX_REQUESTS_PER_HOUR, window_seconds=60 * 60)


@router.post("/ai-analysis", response_model=AIAnalysisResponse)
async def ai_analysis(
    form: DiagnosticForm,
    user_id: str = Depends(get_current_user_id),
):
    # 1️⃣ Model configured? Checked before the quota is counted
    try:
        llm = get_llm()
    except AIServiceUnavailable as exc:
        raise HTTPException(status_code=503, detail=str(exc))

    # 2️⃣ Per-user quota
    try:
        limiter.acquire(user_id)
    except RateLimitExceeded as exc:
        retry_after = max(0, math.ceil(exc.reset_at - time.time())) if exc.reset_at else 3600
        raise HTTPException(
            status_code=429,
            detail="Rate limit exceeded. Please try again later.",
            headers={"Retry-After": str(retry_after)},
        )

    # 3️⃣ Analysis
    try:
        return await run_in_threadpool(run_ai_analysis, form, llm)
    except AIQuotaExceeded as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    except AIServiceError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
