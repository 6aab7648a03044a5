"""Tools for trading video analysis: classification, trade generation and metadata."""

from .assets import (
    GENERIC_ASSET,
    AssetCategory,
    asset_category,
    point_unit,
    reference_prices,
    trading_platform,
)
from .classifier import (
    classify,
    detect_assets,
    detect_trading_style,
    detect_market_condition,
    detect_setup_type,
)
from .trade_generator import GeneratedSession, TradeGenerator
from .video_metadata import YouTubeMetadataSource, extract_video_id, is_valid_youtube_url

__all__ = [
    # Asset tables
    "GENERIC_ASSET",
    "AssetCategory",
    "asset_category",
    "point_unit",
    "reference_prices",
    "trading_platform",
    # Classifier
    "classify",
    "detect_assets",
    "detect_trading_style",
    "detect_market_condition",
    "detect_setup_type",
    # Trade generation
    "GeneratedSession",
    "TradeGenerator",
    # Video metadata
    "YouTubeMetadataSource",
    "extract_video_id",
    "is_valid_youtube_url",
]
