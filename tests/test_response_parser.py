"""Tests for parsing AI completions into reports."""

import json

import pytest

from app.agent.response_parser import extract_json_object, parse_report, placeholder_trade, repair_report_data
from app.exceptions import ParseError
from app.models.report import Report, Summary
from app.tools.assets import GENERIC_ASSET


def _trade(**overrides):
    trade = {
        "id": 1,
        "timestamp": "03:15",
        "asset": "EURUSD",
        "direction": "LONG",
        "entry_price": 1.085,
        "exit_price": 1.0875,
        "points": 25,
        "point_unit": "pips",
        "result": "WIN",
        "setup_type": "breakout",
        "justification": "Rompimento da máxima de Londres",
    }
    trade.update(overrides)
    return trade


class TestExtractJsonObject:
    """Tests for locating the JSON object in raw text."""

    def test_plain_object(self):
        assert extract_json_object('{"a": 1}') == {"a": 1}

    def test_fenced_object(self):
        assert extract_json_object('```json\n{"a": 1}\n```') == {"a": 1}

    def test_surrounding_prose(self):
        raw = 'Claro! Aqui está a análise:\n{"summary": {"win_rate": 70}}\nBons trades.'
        assert extract_json_object(raw) == {"summary": {"win_rate": 70}}

    def test_no_object(self):
        with pytest.raises(ParseError):
            extract_json_object("not json at all")

    def test_empty_text(self):
        with pytest.raises(ParseError):
            extract_json_object("")

    def test_malformed_object(self):
        with pytest.raises(ParseError):
            extract_json_object("{summary: sem aspas}")


class TestParseReport:
    """Tests for full report parsing."""

    def test_fenced_empty_report_gets_placeholder_trade(self):
        report = parse_report('```json\n{"summary":{},"trades":[]}\n```')

        assert len(report.trades) == 1
        trade = report.trades[0]
        assert trade.id == 1
        assert trade.asset == GENERIC_ASSET
        assert trade.timestamp == "00:00"
        assert trade.direction == "LONG"
        assert trade.result == "WIN"
        assert trade.points == 0
        assert trade.entry_price == pytest.approx(1.0850)
        assert report.insights == []

    def test_not_json_raises(self):
        with pytest.raises(ParseError):
            parse_report("not json at all")

    def test_missing_containers_are_backfilled(self):
        report = parse_report('{"summary": null, "trades": null}')

        assert isinstance(report.summary, Summary)
        assert len(report.trades) == 1
        assert report.insights == []

    def test_placeholder_uses_main_asset(self):
        raw = json.dumps({"summary": {"main_assets": ["WIN (Mini Ibovespa)"]}, "trades": []})
        trade = parse_report(raw).trades[0]

        assert trade.asset == "WIN (Mini Ibovespa)"
        assert trade.entry_price == pytest.approx(120000.0)
        assert trade.point_unit == "pontos"

    def test_full_report(self):
        raw = json.dumps({
            "summary": {
                "total_trades": 2,
                "win_rate": 50,
                "total_points": 10,
                "main_assets": ["EURUSD"],
                "trading_platform": "MetaTrader 4",
            },
            "trades": [_trade(), _trade(id=2, direction="SHORT", result="LOSS", points=-15)],
            "insights": ["Setup de rompimento bem explicado"],
            "risk_management": {"stop_loss": "20 pips"},
        })
        report = parse_report(raw)

        assert report.summary.total_trades == 2
        assert [t.id for t in report.trades] == [1, 2]
        assert report.trades[1].points == -15
        assert report.risk_management == {"stop_loss": "20 pips"}

    def test_point_unit_is_derived_from_asset(self):
        raw = json.dumps({"trades": [_trade(asset="BTC/USD", point_unit="pips")]})
        assert parse_report(raw).trades[0].point_unit == "dollars"

    def test_direction_and_result_are_normalized(self):
        raw = json.dumps({"trades": [_trade(direction="short", result="loss")]})
        trade = parse_report(raw).trades[0]

        assert trade.direction == "SHORT"
        assert trade.result == "LOSS"

    def test_unknown_keys_are_ignored(self):
        raw = json.dumps({"trades": [_trade(confidence=0.9)], "extra": "ignored"})
        assert len(parse_report(raw).trades) == 1

    def test_wrong_shape_raises(self):
        with pytest.raises(ParseError):
            parse_report('{"trades": "nenhum"}')

    def test_incomplete_trade_raises(self):
        with pytest.raises(ParseError):
            parse_report('{"trades": [{"id": 1}]}')

    def test_invalid_direction_raises(self):
        with pytest.raises(ParseError):
            parse_report(json.dumps({"trades": [_trade(direction="SIDEWAYS")]}))


class TestPlaceholderTrade:
    """Tests for the stand-in trade."""

    def test_generic_report(self):
        trade = placeholder_trade(Report())
        assert trade.asset == GENERIC_ASSET
        assert trade.point_unit == "pips"

    def test_deterministic(self):
        report = Report(summary=Summary(main_assets=["PETR4"]))
        assert placeholder_trade(report) == placeholder_trade(report)


class TestReportRepair:
    """Tests for the minimal repairs applied before validation."""

    def test_unknown_point_unit_is_replaced(self):
        raw = json.dumps({"trades": [_trade(point_unit="points")]})
        trade = parse_report(raw).trades[0]

        assert trade.point_unit == "pips"

    def test_point_unit_follows_asset(self):
        raw = json.dumps({"trades": [_trade(asset="WIN (Mini Ibovespa)", point_unit="ticks")]})
        assert parse_report(raw).trades[0].point_unit == "pontos"

    def test_null_main_assets(self):
        raw = json.dumps({"summary": {"main_assets": None, "win_rate": 70}, "trades": [_trade()]})
        report = parse_report(raw)

        assert report.summary.main_assets == []
        assert report.summary.win_rate == 70

    def test_percentage_win_rate(self):
        raw = json.dumps({"summary": {"win_rate": "75%", "total_points": "+22 pips"}, "trades": [_trade()]})
        summary = parse_report(raw).summary

        assert summary.win_rate == 75
        assert summary.total_points == 22

    def test_non_numeric_summary_value_uses_default(self):
        raw = json.dumps({"summary": {"biggest_win": "n/a", "trading_platform": None}, "trades": [_trade()]})
        summary = parse_report(raw).summary

        assert summary.biggest_win == 0
        assert summary.trading_platform == ""

    def test_numeric_string_prices(self):
        raw = json.dumps({"trades": [_trade(entry_price="1,0851", points="22 pips")]})
        trade = parse_report(raw).trades[0]

        assert trade.entry_price == pytest.approx(1.0851)
        assert trade.points == 22

    def test_repair_keeps_valid_data(self):
        data = repair_report_data({"summary": {"win_rate": 60}, "trades": [_trade()]})

        assert data["summary"]["win_rate"] == 60
        assert data["trades"][0]["point_unit"] == "pips"
        assert data["insights"] == []
