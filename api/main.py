"""
Reclaim API - Main Application

POST /ai-detect            - AI vs human authorship verdict
POST /manipulation-detect  - Authorship plus hyperreal/manipulated signals
POST /news-verify          - News credibility verdict
POST /analyze              - Combined analysis (authorship + news when detected)
GET  /patterns             - The heuristic rule library
GET  /health               - Health check
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.requests import Request

from reclaim import __version__
from reclaim.config import settings
from reclaim.detector import (
    analyze_content,
    default_provider,
    detect_authorship,
    detect_manipulation,
    verify_news,
)
from reclaim.engine import heuristic_engine
from reclaim.logging import get_logger, setup_logging
from reclaim.providers import VerdictProvider
from reclaim.schemas.detect import (
    AIDetectRequest,
    AIDetectResponse,
    AnalyzeRequest,
    AnalyzeResponse,
    HealthResponse,
    NewsVerifyRequest,
    NewsVerifyResponse,
    PatternsResponse,
)

logger = get_logger("api")


# ============================================================
# STARTUP / SHUTDOWN
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    if not settings.model_path_enabled:
        logger.warning(
            "Model path disabled (no GEMINI_API_KEY or RECLAIM_LLM_PROVIDER=none). "
            "All verdicts will come from the heuristic engine."
        )
    logger.info("Reclaim API starting")
    yield
    logger.info("Reclaim API shutting down")


app = FastAPI(
    title="Reclaim API",
    description="Content authenticity checks: AI authorship and news credibility",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",")],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    allow_credentials=False,
)


@app.get("/", include_in_schema=False)
async def root():
    return JSONResponse({"message": "Reclaim API", "docs": "/docs"})


# ============================================================
# GLOBAL ERROR HANDLER
# ============================================================

@app.exception_handler(Exception)
async def global_error_handler(request: Request, exc: Exception):
    """Structured 500 without leaking internals."""
    logger.error(
        f"Unhandled exception: {type(exc).__name__}",
        extra={"error": str(exc), "path": request.url.path, "method": request.method},
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error. The analysis could not be completed."},
    )


def get_verdict_provider() -> Optional[VerdictProvider]:
    """Primary verdict provider. None means heuristic-only."""
    return default_provider()


def _require_length(text: str, minimum: int, purpose: str) -> None:
    if not text or len(text.strip()) < minimum:
        raise HTTPException(
            400, f"Text too short for {purpose} (minimum {minimum} characters)",
        )


# ============================================================
# ROUTES
# ============================================================

@app.post("/ai-detect", response_model=AIDetectResponse)
async def ai_detect(
    request: AIDetectRequest,
    provider: Optional[VerdictProvider] = Depends(get_verdict_provider),
):
    """Classify text as AI-generated or human-written."""
    _require_length(request.text, settings.MIN_AUTHORSHIP_CHARS, "accurate analysis")
    return await detect_authorship(request.text, provider=provider)


@app.post("/manipulation-detect", response_model=AIDetectResponse)
async def manipulation_detect(request: AIDetectRequest):
    """Authorship verdict that can also flag hyperreal or manipulated text."""
    _require_length(request.text, settings.MIN_AUTHORSHIP_CHARS, "accurate analysis")
    return await detect_manipulation(request.text)


@app.post("/news-verify", response_model=NewsVerifyResponse)
async def news_verify(
    request: NewsVerifyRequest,
    provider: Optional[VerdictProvider] = Depends(get_verdict_provider),
):
    """Estimate whether news content is credible."""
    _require_length(request.text, settings.MIN_NEWS_CHARS, "news verification")
    return await verify_news(request.text, source_url=request.url, provider=provider)


@app.post("/analyze", response_model=AnalyzeResponse, response_model_exclude_none=True)
async def analyze(
    request: AnalyzeRequest,
    provider: Optional[VerdictProvider] = Depends(get_verdict_provider),
):
    """Authorship verdict, plus news verification when the text reads like news."""
    if not request.text and not request.image_url and not request.video_url:
        raise HTTPException(400, "No content provided for analysis")

    result = await analyze_content(
        text=request.text,
        content_type=request.content_type,
        url=request.url,
        image_url=request.image_url,
        video_url=request.video_url,
        provider=provider,
    )
    logger.info(
        f"Analysis complete: {result['authenticity_status']}",
        extra={
            "content_type": request.content_type,
            "is_news": result.get("is_news_content"),
            "status": result["authenticity_status"],
            "duration_ms": result["analysis_time"],
        },
    )
    return result


@app.get("/patterns", response_model=PatternsResponse)
async def get_patterns():
    """Every rule the heuristic engine evaluates."""
    rulebook = heuristic_engine.rulebook
    patterns = rulebook.describe()
    return {
        "rulebook_version": rulebook.version,
        "total_patterns": len(patterns),
        "patterns": patterns,
    }


@app.get("/health", response_model=HealthResponse)
async def health():
    return {
        "status": "operational",
        "version": __version__,
        "rulebook_version": heuristic_engine.rulebook.version,
        "llm_provider": settings.LLM_PROVIDER,
        "model_path_enabled": settings.model_path_enabled,
    }


# --- Security + Version Headers Middleware ---
@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Reclaim-Version"] = __version__
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


# --- Body Size Limit Middleware ---
_MAX_BODY_BYTES = 1_048_576  # 1 MB


@app.middleware("http")
async def enforce_body_size_limit(request: Request, call_next):
    """Reject requests over 1MB, by Content-Length or by actual body."""
    content_length = request.headers.get("content-length")
    if content_length:
        try:
            if int(content_length) > _MAX_BODY_BYTES:
                return JSONResponse(status_code=413, content={"detail": "Request body too large."})
        except ValueError:
            pass  # malformed header; the framework rejects it

    if request.method in ("POST", "PUT", "PATCH"):
        body = await request.body()
        if len(body) > _MAX_BODY_BYTES:
            return JSONResponse(status_code=413, content={"detail": "Request body too large."})

    return await call_next(request)


# --- Request Logging Middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    path = request.url.path
    if path == "/health":
        return await call_next(request)

    start = time.time()
    response = await call_next(request)
    duration_ms = round((time.time() - start) * 1000, 1)

    logger.info(
        f"{request.method} {path} -> {response.status_code} ({duration_ms}ms)",
        extra={
            "method": request.method,
            "path": path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )
    return response
