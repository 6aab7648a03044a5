"""Rule-table classifier for trading video text.

Each table is an ordered list of (pattern, label) pairs. Tables are
evaluated top to bottom against the lower-cased text; the first match
wins, except for the asset table where every match is collected.
"""

import logging
import re
from typing import List, Pattern, Sequence, Tuple, TypeVar

from app.models.video import ClassificationResult, MarketCondition, SetupType, TradingStyle
from app.tools.assets import GENERIC_ASSET

logger = logging.getLogger(__name__)

MAX_DETECTED_ASSETS = 3

T = TypeVar("T")


def _rules(pairs: Sequence[Tuple[str, T]]) -> List[Tuple[Pattern[str], T]]:
    return [(re.compile(pattern, re.IGNORECASE), label) for pattern, label in pairs]


ASSET_PATTERNS = _rules([
    # Forex
    (r"eur\s*/?usd|euro.*dolar|eurusd", "EURUSD"),
    (r"gbp\s*/?usd|libra.*dolar|gbpusd|cable", "GBPUSD"),
    (r"usd\s*/?jpy|dolar.*iene|usdjpy", "USDJPY"),
    (r"aud\s*/?usd|aussie.*dolar|audusd", "AUDUSD"),
    # B3 index futures
    (r"\bwin\b|mini.*ibov|índice.*futur|ibovespa", "WIN (Mini Ibovespa)"),
    (r"\bwdo\b|mini.*dólar|dolar.*futur", "WDO (Mini Dólar)"),
    # B3 equities
    (r"vale3|vale\s+on|companhia.*vale", "VALE3"),
    (r"petr4|petrobras|petróleo.*brasil", "PETR4"),
    (r"itub4|itaú.*unibanco|banco.*itau", "ITUB4"),
    # Crypto
    (r"bitcoin|btc|cripto.*moeda.*principal", "BTC/USD"),
    (r"ethereum|eth\b|ether", "ETH/USD"),
    # Commodities
    (r"ouro|gold|xau", "Gold (XAU/USD)"),
    (r"petróleo|oil|wti|crude", "Oil (WTI)"),
])

# Used only when no asset pattern matched
CATEGORY_FALLBACKS = _rules([
    (r"forex|cambio|moeda", "EURUSD"),
    (r"bovespa|b3|índice", "WIN (Mini Ibovespa)"),
    (r"crypto|bitcoin|moeda.*digital", "BTC/USD"),
    (r"ação|stock|empresa", "VALE3"),
])

TRADING_STYLE_RULES = _rules([
    (r"scalp|rápid|segundos|tick", TradingStyle.SCALPING),
    (r"swing|dias|seman", TradingStyle.SWING_TRADE),
    (r"position|longo.*prazo|mes", TradingStyle.POSITION_TRADING),
    (r"day.*trade|intraday|diário", TradingStyle.DAY_TRADE),
    (r"aula|curso|aprend|ensino", TradingStyle.EDUCATIONAL),
    (r"resultado|performance|balanço", TradingStyle.RESULTS),
])

MARKET_CONDITION_RULES = _rules([
    (r"tendência|trend|alta|bull", MarketCondition.TRENDING),
    (r"lateral|ranging|consolid", MarketCondition.RANGING),
    (r"volátil|volatilidade|instável", MarketCondition.VOLATILE),
    (r"bearish|baixa|bear", MarketCondition.BEARISH),
    (r"breakout|rompimento|ruptura", MarketCondition.BREAKOUT),
])

SETUP_TYPE_RULES = _rules([
    (r"breakout|rompimento", SetupType.BREAKOUT),
    (r"pullback|retração", SetupType.PULLBACK),
    (r"reversal|reversão", SetupType.REVERSAL),
    (r"continuation|continuação", SetupType.CONTINUATION),
    (r"flag|bandeira", SetupType.FLAG_PATTERN),
])


def first_match(text: str, rules: Sequence[Tuple[Pattern[str], T]], default: T) -> T:
    """Return the label of the first rule whose pattern matches ``text``."""
    for pattern, label in rules:
        if pattern.search(text):
            return label
    return default


def detect_assets(text: str) -> List[str]:
    """Detect up to three assets mentioned in ``text``.

    Never returns an empty list: when no specific asset matches, a broad
    category keyword picks a default asset, and failing that the generic
    placeholder is used.

    Example:
        >>> detect_assets("Operando EUR/USD e ouro hoje")
        ['EURUSD', 'Gold (XAU/USD)']
    """
    text = text.lower()
    assets = [asset for pattern, asset in ASSET_PATTERNS if pattern.search(text)]

    if not assets:
        assets = [first_match(text, CATEGORY_FALLBACKS, GENERIC_ASSET)]

    return assets[:MAX_DETECTED_ASSETS]


def detect_trading_style(text: str) -> TradingStyle:
    return first_match(text.lower(), TRADING_STYLE_RULES, TradingStyle.DAY_TRADE)


def detect_market_condition(text: str) -> MarketCondition:
    return first_match(text.lower(), MARKET_CONDITION_RULES, MarketCondition.NORMAL)


def detect_setup_type(text: str) -> SetupType:
    return first_match(text.lower(), SETUP_TYPE_RULES, SetupType.PRICE_ACTION)


def classify(text: str) -> ClassificationResult:
    """Classify free text into assets, trading style, condition and setup.

    Pure function of its input: no I/O and no randomness, so the same
    text always yields the same result.

    Args:
        text: Title, description, tags and comments of a video, or a URL

    Returns:
        ClassificationResult with 1-3 detected assets
    """
    result = ClassificationResult(
        detected_assets=detect_assets(text),
        trading_style=detect_trading_style(text),
        market_condition=detect_market_condition(text),
        setup_type=detect_setup_type(text),
    )
    logger.debug(
        f"Classified text: assets={result.detected_assets}, "
        f"style={result.trading_style.value}, condition={result.market_condition.value}"
    )
    return result
