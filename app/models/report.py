"""Report models returned by the analysis endpoints.

One canonical shape is used everywhere: trades carry an ``asset`` and a
``points`` count, the summary lists ``main_assets``.
"""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

PointUnit = Literal["pips", "pontos", "centavos", "dollars", "cents"]


class TradeRecord(BaseModel):
    """One fabricated or AI-reported trade."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., ge=1, description="1-based sequence within the report")
    timestamp: str = Field("00:00", description="Position within the video (MM:SS)")
    asset: str = Field(..., description="Asset identifier")
    direction: Literal["LONG", "SHORT"] = Field(..., description="Trade direction")
    entry_price: float = Field(..., description="Entry price")
    exit_price: float = Field(..., description="Exit price")
    points: float = Field(..., description="Points / pips gained or lost")
    point_unit: PointUnit = Field("pips", description="Unit of the points field, derived from the asset")
    result: Literal["WIN", "LOSS"] = Field(..., description="Trade outcome")
    setup_type: str = Field("price action", description="Setup that justified the trade")
    justification: str = Field("", description="Why the trade was taken")

    @field_validator("direction", "result", mode="before")
    @classmethod
    def normalize_upper(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


class Summary(BaseModel):
    """Aggregate figures for a report."""

    model_config = ConfigDict(extra="ignore")

    total_trades: int = Field(0, ge=0)
    win_rate: float = Field(0, ge=0, le=100, description="Win rate percentage")
    total_points: float = Field(0)
    biggest_win: float = Field(0)
    biggest_loss: float = Field(0)
    trading_platform: str = Field("")
    main_assets: List[str] = Field(default_factory=list)
    session_type: str = Field("")
    market_condition: str = Field("")


class VideoAnalysis(BaseModel):
    """What the report was derived from."""

    model_config = ConfigDict(extra="ignore")

    original_title: str = ""
    detected_assets: List[str] = Field(default_factory=list)
    trading_style: str = ""
    video_duration: Optional[str] = None
    channel_name: Optional[str] = None
    content_type: str = "real_analysis"


class ContentAuthenticity(BaseModel):
    model_config = ConfigDict(extra="ignore")

    real_video_analyzed: bool = False
    metadata_extracted: bool = False
    contextual_analysis: bool = True
    specific_to_this_video: bool = True


class Report(BaseModel):
    """Top-level analysis report."""

    model_config = ConfigDict(extra="ignore")

    video_analysis: Optional[VideoAnalysis] = None
    summary: Summary = Field(default_factory=Summary)
    trades: List[TradeRecord] = Field(default_factory=list)
    insights: List[str] = Field(default_factory=list)
    risk_management: Dict[str, str] = Field(default_factory=dict)
    technical_analysis: Dict[str, str] = Field(default_factory=dict)
    content_authenticity: Optional[ContentAuthenticity] = None
