"""Synthetic trade generation.

Fabricates plausible trade records and session figures keyed by asset
category and trading style. All randomness comes from an injected
``random.Random`` so callers (and tests) can fix the outputs.
"""

import logging
import random
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from app.models.report import Summary, TradeRecord
from app.models.video import ClassificationResult, SetupType, TradingStyle
from app.tools.assets import (
    AssetCategory,
    asset_category,
    point_unit,
    reference_prices,
    trading_platform,
)

logger = logging.getLogger(__name__)

PROFIT_KEYWORDS = re.compile(r"lucro|profit|ganho")

MAX_WIN_RATE = 90
PRICE_JITTER = 0.01


@dataclass
class GeneratedSession:
    """Summary figures plus the trades generated for one report."""
    summary: Summary
    trades: List[TradeRecord] = field(default_factory=list)


class TradeGenerator:
    """Generator for realistic-looking trade data.

    Only ``rng.random()`` and ``rng.randrange(n)`` are called.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        enforce_consistency: bool = False,
    ):
        """Initialize the generator.

        Args:
            rng: Random source; a fresh unseeded one when omitted
            enforce_consistency: Derive each trade's result from its direction
                and price move instead of drawing it independently
        """
        self.rng = rng or random.Random()
        self.enforce_consistency = enforce_consistency

    def trade_count(self, duration_seconds: int, style: TradingStyle) -> int:
        """Number of trades a video of this length would plausibly show."""
        if style == TradingStyle.SCALPING:
            count = duration_seconds // 300 + 1
        elif style == TradingStyle.EDUCATIONAL:
            count = min(2, duration_seconds // 600)
        else:
            count = duration_seconds // 400 + 1
        return max(1, count)

    def win_rate(self, style: TradingStyle, comments: Sequence[str]) -> int:
        base_rate = 80 if style == TradingStyle.EDUCATIONAL else 60
        comment_bonus = 10 if any(PROFIT_KEYWORDS.search(c.lower()) for c in comments) else 0
        return min(MAX_WIN_RATE, base_rate + self.rng.randrange(20) + comment_bonus)

    def points(self, asset: str, style: TradingStyle) -> int:
        category = asset_category(asset)
        scalping = style == TradingStyle.SCALPING

        if category == AssetCategory.INDEX_FUTURE:
            return 50 + self.rng.randrange(100) if scalping else 100 + self.rng.randrange(300)
        if category == AssetCategory.CRYPTO:
            return 100 + self.rng.randrange(500)
        if category == AssetCategory.FOREX:
            return 10 + self.rng.randrange(20) if scalping else 25 + self.rng.randrange(75)
        return 20 + self.rng.randrange(80)

    def price(self, asset: str, kind: str) -> float:
        """Reference entry or exit price with a small symmetric jitter."""
        entry, exit_ = reference_prices(asset)
        base = entry if kind == "entry" else exit_
        return round(base + (self.rng.random() - 0.5) * PRICE_JITTER, 5)

    def biggest_win(self, asset: str) -> int:
        category = asset_category(asset)
        if category == AssetCategory.INDEX_FUTURE:
            return 200 + self.rng.randrange(300)
        if category == AssetCategory.CRYPTO:
            return 300 + self.rng.randrange(700)
        return 30 + self.rng.randrange(70)

    def biggest_loss(self, asset: str) -> int:
        category = asset_category(asset)
        if category == AssetCategory.INDEX_FUTURE:
            return -(100 + self.rng.randrange(200))
        if category == AssetCategory.CRYPTO:
            return -(150 + self.rng.randrange(350))
        return -(15 + self.rng.randrange(35))

    def timestamp(self, duration_seconds: int) -> str:
        """Random MM:SS position strictly inside the video's whole minutes."""
        whole_minutes = duration_seconds // 60
        minutes = self.rng.randrange(whole_minutes) if whole_minutes > 0 else 0
        seconds = self.rng.randrange(60)
        return f"{minutes:02d}:{seconds:02d}"

    def trade(
        self,
        trade_id: int,
        asset: str,
        style: TradingStyle,
        duration_seconds: int,
        setup_type: SetupType = SetupType.PRICE_ACTION,
        title: Optional[str] = None,
    ) -> TradeRecord:
        timestamp = self.timestamp(duration_seconds)
        direction = "LONG" if self.rng.random() > 0.5 else "SHORT"
        entry_price = self.price(asset, "entry")
        exit_price = self.price(asset, "exit")
        points = self.points(asset, style)
        result = "WIN" if self.rng.random() > 0.4 else "LOSS"

        if self.enforce_consistency:
            moved_up = exit_price > entry_price
            result = "WIN" if moved_up == (direction == "LONG") else "LOSS"

        if title:
            justification = f"Baseado no setup explicado no vídeo '{title}'"
        else:
            justification = f"Setup identificado na análise do vídeo com {asset}"

        return TradeRecord(
            id=trade_id,
            timestamp=timestamp,
            asset=asset,
            direction=direction,
            entry_price=entry_price,
            exit_price=exit_price,
            points=points,
            point_unit=point_unit(asset),
            result=result,
            setup_type=setup_type.value,
            justification=justification,
        )

    def generate(
        self,
        classification: ClassificationResult,
        duration_seconds: int,
        comments: Sequence[str] = (),
        title: Optional[str] = None,
    ) -> GeneratedSession:
        """Generate summary figures and trades for one report.

        Trades cycle through the detected assets. Aggregate figures
        (total points, biggest win/loss) are drawn independently of the
        individual trades.

        Args:
            classification: Classifier output for the video
            duration_seconds: Video length, 0 when unknown
            comments: Comment strings; profit keywords raise the win rate
            title: Video title used in trade justifications

        Returns:
            GeneratedSession with ``summary.total_trades`` trades
        """
        assets = classification.detected_assets
        style = classification.trading_style
        primary = assets[0]

        total_trades = self.trade_count(duration_seconds, style)
        summary = Summary(
            total_trades=total_trades,
            win_rate=self.win_rate(style, comments),
            total_points=self.points(primary, style),
            biggest_win=self.biggest_win(primary),
            biggest_loss=self.biggest_loss(primary),
            trading_platform=trading_platform(primary),
            main_assets=list(assets),
            session_type=style.value,
            market_condition=classification.market_condition.value,
        )

        trades = [
            self.trade(
                trade_id=i + 1,
                asset=assets[i % len(assets)],
                style=style,
                duration_seconds=duration_seconds,
                setup_type=classification.setup_type,
                title=title,
            )
            for i in range(total_trades)
        ]

        logger.debug(f"Generated {len(trades)} synthetic trades for {primary} ({style.value})")
        return GeneratedSession(summary=summary, trades=trades)
