"""Pydantic models for data validation and serialization."""

from .video import (
    TradingStyle,
    MarketCondition,
    SetupType,
    VideoContext,
    ClassificationResult,
    format_duration,
)
from .report import TradeRecord, Summary, VideoAnalysis, ContentAuthenticity, Report
from .request import VideoUrlRequest
from .response import AnalysisResponse, HealthResponse, VideoMetadataResponse, GeminiTestResponse

__all__ = [
    "TradingStyle",
    "MarketCondition",
    "SetupType",
    "VideoContext",
    "ClassificationResult",
    "format_duration",
    "TradeRecord",
    "Summary",
    "VideoAnalysis",
    "ContentAuthenticity",
    "Report",
    "VideoUrlRequest",
    "AnalysisResponse",
    "HealthResponse",
    "VideoMetadataResponse",
    "GeminiTestResponse",
]
