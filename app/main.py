"""FastAPI application for TradeVision - Trading Video Analysis Backend."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, Depends, File, Request, UploadFile, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from app.agent.providers import AIProvider
from app.agent.providers.factory import create_default_provider
from app.agent.video_agent import AnalysisOutcome, VideoAnalyzer
from app.config import get_settings
from app.exceptions import ProviderError, ValidationError
from app.models.request import VideoUrlRequest
from app.models.response import (
    AnalysisResponse,
    GeminiTestResponse,
    HealthResponse,
    VideoMetadataResponse,
)
from app.storage.uploads import scoped_upload
from app.tools.video_metadata import YouTubeMetadataSource, extract_video_id

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

SERVICE_VERSION = "3.0.0"
AI_ENGINE = "Google Gemini"

FEATURES = [
    "Real content extraction",
    "YouTube metadata analysis",
    "Intelligent asset detection",
    "Context-aware analysis",
    "Specific video insights",
]

FEATURES_USED = [
    "YouTube metadata extraction",
    "Asset detection from content",
    "Trading style identification",
    "Context-aware generation",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Starting TradeVision backend...")
    settings = get_settings()
    logger.info(f"Environment: {settings.app_env}")

    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    logger.info(f"✓ Upload directory ready: {settings.upload_dir}")

    provider = create_default_provider(settings)
    metadata_source = YouTubeMetadataSource(settings)

    app.state.ai_provider = provider
    app.state.metadata_source = metadata_source
    app.state.analyzer = VideoAnalyzer(settings, provider, metadata_source)

    if settings.enforce_trade_consistency:
        logger.info("✓ Trade consistency mode enabled")

    yield

    logger.info("Shutting down TradeVision backend...")


# Initialize FastAPI app
app = FastAPI(
    title="TradeVision API",
    description="Trading video analysis with AI-generated trade reports",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)

# Get settings for CORS configuration
settings = get_settings()

# Configure CORS based on environment
if settings.is_production and settings.cors_origin_list:
    # Production: Use configured origins
    cors_origins = settings.cors_origin_list
else:
    # Development: Allow all origins
    cors_origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add rate limiting
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from app.middleware.rate_limit import limiter, rate_limit_ai, rate_limit_standard

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    """Answer user input errors with the service's error payload."""
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Answer malformed request bodies with the service's error payload instead of 422."""
    logger.info(f"Rejected {request.method} {request.url.path}: {len(exc.errors())} body errors")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": "invalid request body"},
    )


def get_analyzer(request: Request) -> VideoAnalyzer:
    return request.app.state.analyzer


def get_ai_provider(request: Request) -> Optional[AIProvider]:
    return request.app.state.ai_provider


def build_analysis_metadata(outcome: AnalysisOutcome, source: str) -> Dict[str, Any]:
    """Processing details attached to every analysis response."""
    metadata: Dict[str, Any] = {
        "version": "ENHANCED-FALLBACK-v3.0" if outcome.used_fallback else "REAL-CONTENT-v3.0",
        "ai_engine": AI_ENGINE,
        "processing_type": "Contextual fallback analysis" if outcome.used_fallback else "Full content analysis",
        "features_used": list(FEATURES_USED),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "video_url": source,
        "fallback": outcome.used_fallback,
    }
    if outcome.used_fallback:
        metadata["note"] = "Análise baseada em detecção inteligente do contexto disponível"
        metadata["error_handled"] = True
    return metadata


@app.get("/")
async def root():
    """Root endpoint - service info."""
    return {
        "service": "TradeVision API",
        "version": SERVICE_VERSION,
        "status": "operational",
        "ai_configured": get_settings().gemini_configured,
        "endpoints": {
            "health": "/health",
            "analyze_youtube": "/analyze-youtube-free",
            "analyze_upload": "/analyze-upload-free",
            "video_metadata": "/video-metadata",
            "test_gemini": "/test-gemini",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="OK",
        message="TradeVision AI REAL CONTENT Backend running!",
        version=SERVICE_VERSION,
        features=FEATURES,
    )


@app.post(
    "/analyze-youtube-free",
    response_model=AnalysisResponse,
    status_code=status.HTTP_200_OK,
    summary="Analyze a YouTube trading video",
    description="""
    Extract the video's metadata, classify its assets, trading style, market
    condition and setup, and produce a trading report with an AI provider.

    Any failure after URL validation is answered with a fallback report built
    from the same locally generated trades (`metadata.fallback` is true).
    """,
    responses={
        400: {"description": "Missing or invalid YouTube URL"},
        429: {"description": "Rate limit exceeded"},
    },
)
@rate_limit_ai
async def analyze_youtube(
    request: Request,
    body: Optional[VideoUrlRequest] = None,
    analyzer: VideoAnalyzer = Depends(get_analyzer),
):
    """
    Analyze a YouTube trading video.

    Args:
        body: VideoUrlRequest carrying the video URL, None when the request has no body

    Returns:
        AnalysisResponse with the report and processing metadata
    """
    url = body.url if body else None
    outcome = await analyzer.analyze_url(url)

    logger.info(
        f"Analysis complete for {url}: {len(outcome.report.trades)} trades "
        f"(fallback: {outcome.used_fallback})"
    )
    return AnalysisResponse(
        success=True,
        report=outcome.report,
        metadata=build_analysis_metadata(outcome, url),
    )


@app.post(
    "/analyze-upload-free",
    response_model=AnalysisResponse,
    status_code=status.HTTP_200_OK,
    summary="Analyze an uploaded trading video",
    responses={
        400: {"description": "No video file in the request"},
        429: {"description": "Rate limit exceeded"},
    },
)
@rate_limit_ai
async def analyze_upload(
    request: Request,
    video: Optional[UploadFile] = File(None),
    analyzer: VideoAnalyzer = Depends(get_analyzer),
):
    """Analyze an uploaded video file.

    The file is kept in the upload directory only while it is processed.
    """
    if video is None or not video.filename:
        raise ValidationError("video file required")

    data = await video.read()
    filename = video.filename

    with scoped_upload(get_settings().upload_dir, filename, data):
        outcome = await analyzer.analyze_upload(filename, len(data), video.content_type)

    metadata = build_analysis_metadata(outcome, filename)
    metadata.update(
        {
            "filename": filename,
            "size_bytes": len(data),
            "content_type": video.content_type,
        }
    )
    return AnalysisResponse(success=True, report=outcome.report, metadata=metadata)


@app.get("/test-gemini", response_model=GeminiTestResponse)
async def test_gemini(provider: Optional[AIProvider] = Depends(get_ai_provider)):
    """Check connectivity with the configured AI provider."""
    if provider is None:
        return GeminiTestResponse(
            status="ERROR",
            gemini_connected=False,
            error="GEMINI_API_KEY not configured",
        )

    try:
        text = await provider.complete("Hello, test connection")
    except ProviderError as e:
        logger.error(f"Gemini connectivity check failed: {e.message}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=GeminiTestResponse(
                status="ERROR",
                gemini_connected=False,
                model=provider.model,
                error=e.message,
            ).model_dump(),
        )

    return GeminiTestResponse(
        status="OK",
        gemini_connected=True,
        model=provider.model,
        response=text,
    )


@app.post(
    "/video-metadata",
    response_model=VideoMetadataResponse,
    responses={
        400: {"description": "Missing or invalid YouTube URL"},
        502: {"description": "Metadata provider failed"},
    },
)
@rate_limit_standard
async def video_metadata(
    request: Request,
    body: Optional[VideoUrlRequest] = None,
    analyzer: VideoAnalyzer = Depends(get_analyzer),
):
    """Return the metadata extracted for a YouTube video."""
    url = analyzer.validate_url(body.url if body else None)

    try:
        context = await analyzer.metadata_source.fetch(url)
    except ProviderError as e:
        logger.warning(f"Metadata lookup failed for {url}: {e.message}")
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"success": False, "error": e.message},
        )

    metadata = context.model_dump(exclude={"content_extracted", "top_comments"})
    metadata["video_id"] = extract_video_id(url)
    metadata["duration"] = context.duration_label
    return VideoMetadataResponse(success=True, metadata=metadata)
