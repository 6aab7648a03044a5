"""Tests for the rule-table classifier."""

import pytest

from app.models.video import MarketCondition, SetupType, TradingStyle, VideoContext
from app.tools.assets import GENERIC_ASSET
from app.tools.classifier import (
    MAX_DETECTED_ASSETS,
    classify,
    detect_assets,
    detect_market_condition,
    detect_setup_type,
    detect_trading_style,
)


class TestDetectAssets:
    """Tests for asset detection."""

    def test_single_forex_pair(self):
        """EUR/USD spelled with a slash is detected."""
        assert detect_assets("Análise do EUR/USD hoje") == ["EURUSD"]

    def test_multiple_assets_in_table_order(self):
        """Assets are returned in table order, not text order."""
        assets = detect_assets("Ouro e EURUSD na mesma sessão")
        assert assets == ["EURUSD", "Gold (XAU/USD)"]

    def test_case_insensitive(self):
        assert detect_assets("BITCOIN rumo aos 50k") == ["BTC/USD"]

    def test_capped_at_three(self):
        """More than three matches are truncated to the first three."""
        text = "eurusd gbpusd usdjpy audusd bitcoin gold"
        assets = detect_assets(text)
        assert len(assets) == MAX_DETECTED_ASSETS
        assert assets == ["EURUSD", "GBPUSD", "USDJPY"]

    def test_b3_assets(self):
        assets = detect_assets("Day trade no WIN e na PETR4")
        assert assets == ["WIN (Mini Ibovespa)", "PETR4"]

    def test_win_requires_word_boundary(self):
        """'win' inside another word is not the Mini Ibovespa contract."""
        assert "WIN (Mini Ibovespa)" not in detect_assets("winning strategy for forex")

    def test_category_fallback_forex(self):
        """Without a specific asset a category keyword picks a default."""
        assert detect_assets("Estratégia de forex para iniciantes") == ["EURUSD"]

    def test_category_fallback_stocks(self):
        assert detect_assets("Como escolher uma ação para investir") == ["VALE3"]

    def test_generic_when_nothing_matches(self):
        assert detect_assets("Vlog de viagem") == [GENERIC_ASSET]

    def test_empty_text(self):
        assert detect_assets("") == [GENERIC_ASSET]


class TestDetectTradingStyle:
    """Tests for trading style detection."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("scalping no índice", TradingStyle.SCALPING),
            ("operação de swing", TradingStyle.SWING_TRADE),
            ("position trading de longo prazo", TradingStyle.POSITION_TRADING),
            ("day trade intraday", TradingStyle.DAY_TRADE),
            ("aula completa para aprender", TradingStyle.EDUCATIONAL),
            ("resultado do ano", TradingStyle.RESULTS),
        ],
    )
    def test_styles(self, text, expected):
        assert detect_trading_style(text) == expected

    def test_scalping_checked_before_swing(self):
        """Text mentioning both styles is classified as scalping."""
        assert detect_trading_style("Swing trade ou scalping?") == TradingStyle.SCALPING

    def test_default_is_day_trade(self):
        assert detect_trading_style("gráfico do euro") == TradingStyle.DAY_TRADE


class TestDetectMarketCondition:
    """Tests for market condition detection."""

    def test_trending(self):
        assert detect_market_condition("Mercado em tendência de alta") == MarketCondition.TRENDING

    def test_ranging(self):
        assert detect_market_condition("Mercado lateral hoje") == MarketCondition.RANGING

    def test_volatile(self):
        assert detect_market_condition("Dia de muita volatilidade") == MarketCondition.VOLATILE

    def test_breakout(self):
        assert detect_market_condition("Ruptura do topo") == MarketCondition.BREAKOUT

    def test_default_is_normal(self):
        assert detect_market_condition("análise de segunda") == MarketCondition.NORMAL


class TestDetectSetupType:
    """Tests for setup type detection."""

    def test_pullback(self):
        assert detect_setup_type("Entrada no pullback da média") == SetupType.PULLBACK

    def test_flag(self):
        assert detect_setup_type("Padrão de bandeira") == SetupType.FLAG_PATTERN

    def test_breakout_before_pullback(self):
        assert detect_setup_type("rompimento seguido de pullback") == SetupType.BREAKOUT

    def test_default_is_price_action(self):
        assert detect_setup_type("leitura de candles") == SetupType.PRICE_ACTION


class TestClassify:
    """Tests for the combined classifier."""

    def test_full_classification(self):
        result = classify("Scalping EUR/USD com rompimento em mercado volátil")

        assert result.detected_assets == ["EURUSD"]
        assert result.trading_style == TradingStyle.SCALPING
        assert result.market_condition == MarketCondition.VOLATILE
        assert result.setup_type == SetupType.BREAKOUT
        assert result.primary_asset == "EURUSD"

    def test_deterministic(self):
        text = "Swing trade em PETR4 e VALE3 com pullback"
        assert classify(text) == classify(text)

    def test_video_context_text(self, eurusd_context):
        result = classify(eurusd_context.content_text())

        assert result.detected_assets == ["EURUSD"]
        assert result.trading_style == TradingStyle.SCALPING
        assert result.market_condition == MarketCondition.VOLATILE
        assert result.setup_type == SetupType.BREAKOUT

    def test_url_only(self):
        """A bare URL falls back to the generic asset and defaults."""
        result = classify("https://www.youtube.com/watch?v=dQw4w9WgXcQ")

        assert result.detected_assets == [GENERIC_ASSET]
        assert result.trading_style == TradingStyle.DAY_TRADE
        assert result.market_condition == MarketCondition.NORMAL
        assert result.setup_type == SetupType.PRICE_ACTION

    def test_placeholder_context_is_generic(self):
        """Block labels such as DURAÇÃO do not trigger the equity fallback."""
        context = VideoContext.placeholder("https://youtu.be/dQw4w9WgXcQ")
        result = classify(context.content_text())

        assert result.detected_assets == [GENERIC_ASSET]
        assert result.trading_style == TradingStyle.DAY_TRADE

    def test_content_text_has_no_labels(self, eurusd_context):
        text = eurusd_context.content_text()

        assert "DURAÇÃO" not in text
        assert eurusd_context.title in text
        assert "forex" in text
