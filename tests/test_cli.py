"""Tests for the trading journal CLI commands.

**Feature: trade-analytics**
"""

import csv
import json
import sqlite3
from datetime import datetime, timedelta
from pathlib import Path

import pytest
from click.testing import CliRunner

from tradejournal.cli import cli
from tradejournal.config import DB_PATH_ENV
from tradejournal.db.store import TRADES_TABLE_SQL


def create_journal(db_path: Path) -> None:
    """Journal with four live trades and one backtest for user 1."""
    base = datetime(2024, 4, 1, 9, 30)
    rows = [
        (1, base - timedelta(days=1), "Win", 25.0, "Backtest", "None", "B"),
        (1, base, "Win", 100.0, "Live", "None", "A+"),
        (1, base + timedelta(days=1), "Loss", -40.0, "Live", "FOMO", "C"),
        (1, base + timedelta(days=2), "Loss", -20.0, "Live", "FOMO", None),
        (1, base + timedelta(days=3), "Win", 60.0, "Live", "Moved stop", "A"),
        (2, base, "Win", 999.0, "Live", "None", None),
    ]
    conn = sqlite3.connect(db_path)
    try:
        conn.execute(TRADES_TABLE_SQL)
        for user_id, ts, result, pnl, trade_type, mistake, grade in rows:
            conn.execute(
                "INSERT INTO trades (user_id, timestamp, session, strategy, result, pnl, rr, "
                "mistake, trade_type, setup_grade, log_date, entry_time) "
                "VALUES (?, ?, 'London', 'Breakout', ?, ?, '1:2', ?, ?, ?, ?, ?)",
                (
                    user_id,
                    ts.isoformat(),
                    result,
                    pnl,
                    mistake,
                    trade_type,
                    grade,
                    ts.date().isoformat(),
                    ts.strftime("%H:%M"),
                ),
            )
        conn.commit()
    finally:
        conn.close()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def base_args(tmp_path: Path, monkeypatch) -> list[str]:
    """Global options pointing every file at a temp directory."""
    monkeypatch.delenv(DB_PATH_ENV, raising=False)
    db_path = tmp_path / "trades.db"
    create_journal(db_path)
    return [
        "--config", str(tmp_path / "config.toml"),
        "--db", str(db_path),
        "--session-file", str(tmp_path / "session.json"),
    ]


@pytest.fixture
def logged_in(runner: CliRunner, base_args: list[str]) -> list[str]:
    result = runner.invoke(cli, base_args + ["login", "--discord-id", "1", "--username", "trader"])
    assert result.exit_code == 0, result.output
    return base_args


def invoke_json(runner: CliRunner, args: list[str]):
    result = runner.invoke(cli, args + ["--json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


class TestCommandGroup:
    def test_help_lists_sections(self, runner: CliRunner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for section in ("Session:", "Overview:", "Breakdowns:", "History:"):
            assert section in result.output
        assert "calendar" in result.output
        assert "mistakes" in result.output

    def test_unknown_command(self, runner: CliRunner, base_args: list[str]):
        result = runner.invoke(cli, base_args + ["nonexistent"])
        assert result.exit_code == 2

    def test_commands_resolve_by_name(self):
        ctx = cli.make_context("tradejournal", [], resilient_parsing=True)
        for name in cli.list_commands(ctx):
            assert cli.get_command(ctx, name).name == name


class TestSessionCommands:
    def test_login_and_whoami(self, runner: CliRunner, logged_in: list[str]):
        result = runner.invoke(cli, logged_in + ["whoami"])
        assert result.exit_code == 0
        assert "trader" in result.output

    def test_login_rejects_non_numeric_id(self, runner: CliRunner, base_args: list[str]):
        result = runner.invoke(cli, base_args + ["login", "--discord-id", "abc", "--username", "x"])
        assert result.exit_code == 1

    def test_logout(self, runner: CliRunner, logged_in: list[str]):
        result = runner.invoke(cli, logged_in + ["logout"])
        assert "Logged out." in result.output

        result = runner.invoke(cli, logged_in + ["whoami"])
        assert result.exit_code == 1
        assert "Not logged in." in result.output

    def test_init_writes_config(self, runner: CliRunner, base_args: list[str], tmp_path: Path):
        target = tmp_path / "custom" / "config.toml"
        result = runner.invoke(cli, base_args + ["init", "--path", str(target)])
        assert result.exit_code == 0
        assert target.exists()


class TestUnauthorized:
    @pytest.mark.parametrize("command", ["stats", "trades", "analytics", "mistakes", "summary"])
    def test_requires_login(self, runner: CliRunner, base_args: list[str], command: str):
        result = runner.invoke(cli, base_args + [command])
        assert result.exit_code == 1
        assert "Not logged in." in result.output

    def test_missing_database(self, runner: CliRunner, logged_in: list[str], tmp_path: Path):
        args = logged_in + ["--db", str(tmp_path / "missing.db"), "stats"]
        result = runner.invoke(cli, args)
        assert result.exit_code == 1
        assert "Could not open trades database" in result.output


class TestDashboardCommands:
    def test_stats_json(self, runner: CliRunner, logged_in: list[str]):
        data = invoke_json(runner, logged_in + ["stats"])

        assert data["stats"]["total_trades"] == 5
        assert data["stats"]["wins"] == 3
        assert data["stats"]["losses"] == 2
        assert data["stats"]["total_pnl"] == 125.0
        assert data["stats"]["win_rate"] == 60.0
        assert data["streak"] == {"type": "win", "count": 1}

    def test_stats_filtered_by_type(self, runner: CliRunner, logged_in: list[str]):
        data = invoke_json(runner, logged_in + ["stats", "--type", "Live"])
        assert data["stats"]["total_trades"] == 4
        assert data["stats"]["win_rate"] == 50.0

    def test_stats_table(self, runner: CliRunner, logged_in: list[str]):
        result = runner.invoke(cli, logged_in + ["stats"])
        assert result.exit_code == 0
        assert "Trading Stats" in result.output

    def test_equity_json(self, runner: CliRunner, logged_in: list[str]):
        data = invoke_json(runner, logged_in + ["equity", "--type", "Live"])

        assert [p["cumulative_pnl"] for p in data["equity"]] == [100.0, 60.0, 40.0, 100.0]
        assert data["drawdown"] == 60.0

    def test_summary_json(self, runner: CliRunner, logged_in: list[str]):
        data = invoke_json(runner, logged_in + ["summary", "--type", "Live"])

        assert data["avg_win"] == 80.0
        assert data["avg_loss"] == 30.0
        assert data["profit_factor"] == 2.67
        assert data["best_session"] == "London"

    def test_streaks_json(self, runner: CliRunner, logged_in: list[str]):
        data = invoke_json(runner, logged_in + ["streaks"])

        assert data["longest_win_streak"] == 2
        assert data["longest_loss_streak"] == 2
        assert data["current_streak_type"] == "win"

    def test_calendar_json(self, runner: CliRunner, logged_in: list[str]):
        data = invoke_json(runner, logged_in + ["calendar", "--month", "2024-04"])

        assert data["month"] == "April 2024"
        assert [d["date"] for d in data["calendar"]] == [
            "2024-04-01",
            "2024-04-02",
            "2024-04-03",
            "2024-04-04",
        ]

    def test_calendar_day_json(self, runner: CliRunner, logged_in: list[str]):
        data = invoke_json(runner, logged_in + ["calendar", "--day", "2024-04-02"])

        assert data["date"] == "2024-04-02"
        assert data["pnl"] == -40.0
        assert [t["mistake"] for t in data["trades"]] == ["FOMO"]

    def test_calendar_day_without_trades(self, runner: CliRunner, logged_in: list[str]):
        data = invoke_json(runner, logged_in + ["calendar", "--day", "2024-04-20"])
        assert data["trades"] == []
        assert data["pnl"] == 0.0

    def test_calendar_day_table(self, runner: CliRunner, logged_in: list[str]):
        result = runner.invoke(cli, logged_in + ["calendar", "--day", "2024-04-01"])
        assert result.exit_code == 0
        assert "Day P&L" in result.output

    def test_calendar_invalid_day(self, runner: CliRunner, logged_in: list[str]):
        result = runner.invoke(cli, logged_in + ["calendar", "--day", "04/02/2024"])
        assert result.exit_code == 1
        assert "Invalid day" in result.output

    @pytest.mark.parametrize("month", ["2024-13", "April", "2024-04-01"])
    def test_calendar_invalid_month(self, runner: CliRunner, logged_in: list[str], month: str):
        result = runner.invoke(cli, logged_in + ["calendar", "--month", month])
        assert result.exit_code == 1
        assert "Invalid month" in result.output


class TestPerformanceCommands:
    def test_analytics_json(self, runner: CliRunner, logged_in: list[str]):
        data = invoke_json(runner, logged_in + ["analytics"])

        assert set(data) == {"timeOfDay", "dayOfWeek", "rrEfficiency", "drawdown"}
        assert [h["hour"] for h in data["timeOfDay"]] == [9]
        assert data["rrEfficiency"][0]["target_rr"] == "1:2"

    def test_mistakes_json(self, runner: CliRunner, logged_in: list[str]):
        data = invoke_json(runner, logged_in + ["mistakes"])

        assert set(data) == {"mistakeStats", "mistakeTrends"}
        assert [m["mistake"] for m in data["mistakeStats"]] == ["FOMO", "Moved stop"]
        assert data["mistakeStats"][0]["total_cost"] == -60.0

    def test_mistakes_table(self, runner: CliRunner, logged_in: list[str]):
        result = runner.invoke(cli, logged_in + ["mistakes", "--days", "7"])
        assert result.exit_code == 0
        assert "Most Costly" in result.output

    def test_grades_json(self, runner: CliRunner, logged_in: list[str]):
        data = invoke_json(runner, logged_in + ["grades", "--type", "Live"])
        assert [g["setup_grade"] for g in data] == ["A", "A+", "C"]

    def test_strategies_and_sessions(self, runner: CliRunner, logged_in: list[str]):
        strategies = invoke_json(runner, logged_in + ["strategies"])
        sessions = invoke_json(runner, logged_in + ["sessions"])

        assert strategies[0]["strategy"] == "Breakout"
        assert strategies[0]["count"] == 5
        assert sessions[0]["session"] == "London"


class TestTradesCommand:
    def test_newest_first_with_limit(self, runner: CliRunner, logged_in: list[str]):
        data = invoke_json(runner, logged_in + ["trades", "--limit", "2"])
        assert [t["pnl"] for t in data["trades"]] == [60.0, -20.0]

    def test_all_filtered_by_type(self, runner: CliRunner, logged_in: list[str]):
        data = invoke_json(runner, logged_in + ["trades", "--all", "--type", "Backtest"])
        assert [t["pnl"] for t in data["trades"]] == [25.0]

    def test_invalid_limit(self, runner: CliRunner, logged_in: list[str]):
        result = runner.invoke(cli, logged_in + ["trades", "--limit", "0"])
        assert result.exit_code == 2

    def test_csv_export(self, runner: CliRunner, logged_in: list[str], tmp_path: Path):
        out = tmp_path / "export.csv"
        result = runner.invoke(cli, logged_in + ["trades", "--all", "--csv", str(out)])
        assert result.exit_code == 0

        with open(out, newline="") as f:
            rows = list(csv.reader(f))

        assert rows[0][0] == "Date"
        assert len(rows) == 6
        assert rows[1][0] == "2024-04-04"
        assert rows[1][6] == "60.00"
