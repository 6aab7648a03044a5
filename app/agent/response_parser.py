"""Extraction of a Report from a raw AI text completion."""

import json
import logging
import re

import pydantic

from app.exceptions import ParseError
from app.models.report import Report, TradeRecord
from app.tools.assets import GENERIC_ASSET, point_unit, reference_prices

logger = logging.getLogger(__name__)

# Opening or closing fence, with an optional language tag
CODE_FENCE_RE = re.compile(r"```[a-zA-Z0-9_+-]*")

# Greedy: first "{" through last "}"; braces inside strings are not special
JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")

REQUIRED_CONTAINERS = {
    "summary": dict,
    "trades": list,
    "insights": list,
}


# Leading number in strings such as "75%" or "+22 pips"
NUMBER_RE = re.compile(r"[-+]?\d+(?:[.,]\d+)?")

SUMMARY_NUMBER_FIELDS = ("total_trades", "win_rate", "total_points", "biggest_win", "biggest_loss")
SUMMARY_LIST_FIELDS = ("main_assets",)
TRADE_NUMBER_FIELDS = ("entry_price", "exit_price", "points")


def _coerce_number(value):
    """Turn numeric strings into floats; None when nothing numeric is found."""
    if not isinstance(value, str):
        return value
    match = NUMBER_RE.search(value)
    if not match:
        return None
    return float(match.group(0).replace(",", "."))


def _repair_summary(summary: dict) -> None:
    for key in SUMMARY_LIST_FIELDS:
        if summary.get(key) is None:
            summary[key] = []
    for key in SUMMARY_NUMBER_FIELDS:
        if key in summary:
            value = _coerce_number(summary[key])
            if value is None:
                summary.pop(key)
            else:
                summary[key] = value
    if isinstance(summary.get("total_trades"), float):
        summary["total_trades"] = int(summary["total_trades"])
    for key in [k for k, v in summary.items() if v is None]:
        summary.pop(key)


def _repair_trade(trade: dict) -> None:
    # point_unit is derived from the asset, never taken from the model
    if isinstance(trade.get("asset"), str):
        trade["point_unit"] = point_unit(trade["asset"])
    else:
        trade.pop("point_unit", None)
    for key in TRADE_NUMBER_FIELDS:
        if isinstance(trade.get(key), str):
            trade[key] = _coerce_number(trade[key])


def repair_report_data(data: dict) -> dict:
    """Fix the small shape mismatches models commonly produce, in place."""
    for key, container in REQUIRED_CONTAINERS.items():
        if data.get(key) is None:
            data[key] = container()

    if isinstance(data["summary"], dict):
        _repair_summary(data["summary"])
    if isinstance(data["trades"], list):
        for trade in data["trades"]:
            if isinstance(trade, dict):
                _repair_trade(trade)
    return data


def placeholder_trade(report: Report) -> TradeRecord:
    """Deterministic stand-in trade for reports that came back without any."""
    asset = report.summary.main_assets[0] if report.summary.main_assets else GENERIC_ASSET
    entry_price, exit_price = reference_prices(asset)
    return TradeRecord(
        id=1,
        timestamp="00:00",
        asset=asset,
        direction="LONG",
        entry_price=entry_price,
        exit_price=exit_price,
        points=0,
        point_unit=point_unit(asset),
        result="WIN",
        setup_type="price action",
        justification=f"Operação de referência gerada automaticamente para {asset}",
    )


def extract_json_object(raw_text: str) -> dict:
    """Locate and decode the JSON object in a completion.

    Raises:
        ParseError: If no object can be located or decoded
    """
    cleaned = CODE_FENCE_RE.sub("", raw_text or "")
    match = JSON_OBJECT_RE.search(cleaned)
    if not match:
        raise ParseError("Could not locate a JSON object in the AI response")

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ParseError(f"AI response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ParseError("AI response JSON is not an object")
    return data


def parse_report(raw_text: str) -> Report:
    """Parse a raw completion into a Report.

    Missing ``summary``, ``trades`` and ``insights`` are backfilled with
    empty containers, and a placeholder trade is injected when the trade
    list is empty. Every trade's point unit is re-derived from its asset
    before validation, null summary lists become empty and numeric
    strings such as ``"75%"`` are read as numbers.

    Args:
        raw_text: Text returned by the AI provider

    Returns:
        Report with at least one trade

    Raises:
        ParseError: If no JSON object is found or it does not fit the Report shape
    """
    data = repair_report_data(extract_json_object(raw_text))

    try:
        report = Report.model_validate(data)
    except pydantic.ValidationError as e:
        raise ParseError(f"AI response does not match the report shape: {e.error_count()} errors") from e

    if not report.trades:
        logger.info("AI report had no trades, injecting placeholder trade")
        report.trades.append(placeholder_trade(report))

    return report
