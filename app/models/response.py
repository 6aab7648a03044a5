"""Response models for API endpoints."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from app.models.report import Report


class HealthResponse(BaseModel):
    """Health check payload."""

    status: str = Field(..., description="Service status")
    message: str = Field(..., description="Human-readable status message")
    version: str = Field(..., description="Service version")
    features: List[str] = Field(default_factory=list, description="Enabled features")


class AnalysisResponse(BaseModel):
    """Response for the analysis endpoints.

    Attributes:
        success: Always true; failures are folded into a fallback report
        report: The analysis report
        metadata: Processing details (engine, version, fallback flag, ...)
    """

    success: bool = Field(True)
    report: Report
    metadata: Dict[str, Any] = Field(default_factory=dict)


class VideoMetadataResponse(BaseModel):
    """Response for the metadata lookup endpoint."""

    success: bool = Field(True)
    metadata: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class GeminiTestResponse(BaseModel):
    """Response for the Gemini connectivity check."""

    status: str
    gemini_connected: bool
    model: Optional[str] = None
    response: Optional[str] = None
    error: Optional[str] = None
