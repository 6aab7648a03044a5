"""Asset catalog: identifiers, categories and reference prices.

Every asset-derived attribute (platform, point unit, price table entry)
is a pure function of the asset identifier.
"""

from enum import Enum
from typing import Dict, Tuple

GENERIC_ASSET = "Mercado Financeiro"
DEFAULT_PRICE_ASSET = "EURUSD"


class AssetCategory(str, Enum):
    INDEX_FUTURE = "index_future"
    CRYPTO = "crypto"
    EQUITY = "equity"
    FOREX = "forex"
    OTHER = "other"


# (entry, exit) reference prices
REFERENCE_PRICES: Dict[str, Tuple[float, float]] = {
    "EURUSD": (1.0850, 1.0875),
    "GBPUSD": (1.2450, 1.2475),
    "USDJPY": (149.50, 149.85),
    "AUDUSD": (0.6550, 0.6575),
    "WIN (Mini Ibovespa)": (120000.0, 120150.0),
    "WDO (Mini Dólar)": (5000.0, 5015.0),
    "VALE3": (68.50, 68.85),
    "PETR4": (36.20, 36.55),
    "ITUB4": (32.10, 32.40),
    "BTC/USD": (43500.0, 43750.0),
    "ETH/USD": (2300.0, 2340.0),
    "Gold (XAU/USD)": (2030.0, 2042.0),
    "Oil (WTI)": (78.40, 79.10),
}

_PLATFORMS = {
    AssetCategory.INDEX_FUTURE: "Profit",
    AssetCategory.CRYPTO: "Binance",
    AssetCategory.EQUITY: "Homebroker B3",
}

_POINT_UNITS = {
    AssetCategory.INDEX_FUTURE: "pontos",
    AssetCategory.CRYPTO: "dollars",
    AssetCategory.EQUITY: "centavos",
}


def asset_category(asset: str) -> AssetCategory:
    """Classify an asset identifier by substring membership.

    Order matters: ``BTC/USD`` is crypto even though it contains ``USD``.
    """
    if "WIN" in asset or "WDO" in asset:
        return AssetCategory.INDEX_FUTURE
    if "BTC" in asset or "ETH" in asset:
        return AssetCategory.CRYPTO
    if "VALE" in asset or "PETR" in asset or "ITUB" in asset:
        return AssetCategory.EQUITY
    if "USD" in asset or "JPY" in asset:
        return AssetCategory.FOREX
    return AssetCategory.OTHER


def trading_platform(asset: str) -> str:
    """Platform the asset would typically be traded on."""
    return _PLATFORMS.get(asset_category(asset), "MetaTrader 4")


def point_unit(asset: str) -> str:
    """Unit used to count price movement for the asset."""
    return _POINT_UNITS.get(asset_category(asset), "pips")


def reference_prices(asset: str) -> Tuple[float, float]:
    """Reference (entry, exit) prices; unknown assets use EURUSD's."""
    return REFERENCE_PRICES.get(asset, REFERENCE_PRICES[DEFAULT_PRICE_ASSET])
