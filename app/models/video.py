"""Video context and classification models."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class TradingStyle(str, Enum):
    """Trading style detected from the video text."""
    SCALPING = "scalping"
    SWING_TRADE = "swing trade"
    POSITION_TRADING = "position trading"
    DAY_TRADE = "day trade"
    EDUCATIONAL = "educativo"
    RESULTS = "resultado"


class MarketCondition(str, Enum):
    """Market condition mentioned in the video text."""
    TRENDING = "trending"
    RANGING = "ranging"
    VOLATILE = "volatile"
    BEARISH = "bearish"
    BREAKOUT = "breakout"
    NORMAL = "normal"


class SetupType(str, Enum):
    """Chart pattern used to justify a trade."""
    BREAKOUT = "breakout"
    PULLBACK = "pullback"
    REVERSAL = "reversal"
    CONTINUATION = "continuation"
    FLAG_PATTERN = "flag pattern"
    PRICE_ACTION = "price action"


def format_duration(seconds: int) -> str:
    """Format a duration in seconds as M:SS."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60}:{seconds % 60:02d}"


class VideoContext(BaseModel):
    """Everything known about a video for the length of one request.

    Attributes:
        url: Source URL (or upload filename)
        title: Video title
        description: Description, already truncated
        author: Channel name
        duration_seconds: Length of the video, 0 when unknown
        tags: Video keywords, already capped
        top_comments: Short comment strings (may be simulated)
        content_extracted: False when the metadata fetch failed
    """

    url: str = Field("", description="Source URL or upload filename")
    title: str = Field("", description="Video title")
    description: str = Field("", description="Truncated video description")
    author: str = Field("", description="Channel / author name")
    duration_seconds: int = Field(0, ge=0, description="Video length in seconds, 0 when unknown")
    tags: List[str] = Field(default_factory=list, description="Video keywords")
    top_comments: List[str] = Field(default_factory=list, description="Relevant comments")
    views: Optional[int] = Field(None, description="View count")
    upload_date: Optional[str] = Field(None, description="Upload date (YYYY-MM-DD)")
    category: Optional[str] = Field(None, description="Platform category")
    thumbnail_url: Optional[str] = Field(None, description="Thumbnail URL")
    content_extracted: bool = Field(True, description="Whether real metadata was extracted")

    @classmethod
    def placeholder(cls, url: str = "") -> "VideoContext":
        """Context used when the metadata fetch fails."""
        return cls(
            url=url,
            title="Vídeo de Trading",
            description="",
            author="Canal de Trading",
            duration_seconds=0,
            content_extracted=False,
        )

    @property
    def duration_label(self) -> str:
        return format_duration(self.duration_seconds)

    def content_text(self) -> str:
        """Title, description, author, tags and comments without block labels.

        Used for classification, so words in the labels (``DURAÇÃO``
        contains ``ação``) never count as content.
        """
        parts = [self.title, self.description, self.author, *self.tags, *self.top_comments]
        return "\n".join(part for part in parts if part)

    def full_text(self) -> str:
        """Render the labelled context block used in the prompt."""
        return (
            f"TÍTULO: {self.title}\n"
            f"DESCRIÇÃO: {self.description}\n"
            f"AUTOR: {self.author}\n"
            f"DURAÇÃO: {self.duration_label}\n"
            f"TAGS: {', '.join(self.tags)}\n"
            f"COMENTÁRIOS RELEVANTES: {' | '.join(self.top_comments)}\n"
        )


class ClassificationResult(BaseModel):
    """Tags derived from video text by the classifier."""

    detected_assets: List[str] = Field(
        ...,
        min_length=1,
        max_length=3,
        description="Canonical asset ids in pattern table order",
    )
    trading_style: TradingStyle = Field(TradingStyle.DAY_TRADE)
    market_condition: MarketCondition = Field(MarketCondition.NORMAL)
    setup_type: SetupType = Field(SetupType.PRICE_ACTION)

    @property
    def primary_asset(self) -> str:
        return self.detected_assets[0]
