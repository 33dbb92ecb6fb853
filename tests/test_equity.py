"""Property-based tests for the equity curve and drawdown.

**Feature: trade-analytics**
"""

import math
from datetime import datetime, timedelta

from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.analytics import (
    build_equity_curve,
    calculate_current_streak,
    calculate_max_drawdown,
    calculate_streaks,
    drawdown_for_trades,
)
from tradejournal.models import Trade, TradeResult

pnl_strategy = st.floats(min_value=-10000.0, max_value=10000.0, allow_nan=False, allow_infinity=False)


def make_trades(pnls: list[float]) -> list[Trade]:
    """Build ascending trades whose result follows the sign of pnl."""
    base = datetime(2024, 3, 4, 9, 0)
    trades = []
    for i, pnl in enumerate(pnls):
        if pnl > 0:
            result = TradeResult.WIN
        elif pnl < 0:
            result = TradeResult.LOSS
        else:
            result = TradeResult.BREAKEVEN
        trades.append(
            Trade(id=i + 1, user_id=7, timestamp=base + timedelta(hours=i), result=result, pnl=pnl)
        )
    return trades


class TestEquityCurve:
    """
    **Feature: trade-analytics, Property: Equity Curve Accumulation**

    *For any* trades, the curve has one point per trade and ends at the
    sum of all P&L.
    """

    @given(pnls=st.lists(pnl_strategy, min_size=0, max_size=50))
    @settings(max_examples=100)
    def test_length_and_final_value(self, pnls: list[float]):
        trades = make_trades(pnls)
        curve = build_equity_curve(trades)

        assert len(curve) == len(trades)
        if curve:
            assert abs(curve[-1].cumulative_pnl - sum(pnls)) <= 0.01

    @given(pnls=st.lists(pnl_strategy, min_size=1, max_size=50))
    @settings(max_examples=50)
    def test_timestamps_follow_trades(self, pnls: list[float]):
        trades = make_trades(pnls)
        curve = build_equity_curve(trades)

        assert [p.timestamp for p in curve] == [t.timestamp for t in trades]

    def test_empty(self):
        assert build_equity_curve([]) == []

    def test_rounds_only_output(self):
        # Each 0.004 rounds to 0.00, but the running total still grows
        curve = build_equity_curve(make_trades([0.004, 0.004, 0.004]))
        assert [p.cumulative_pnl for p in curve] == [0.0, 0.01, 0.01]


class TestMaxDrawdown:
    """
    **Feature: trade-analytics, Property: Drawdown Bounds**

    Drawdown is never negative, never NaN, and is at most 100% while
    equity stays non-negative.
    """

    @given(values=st.lists(pnl_strategy, min_size=0, max_size=50))
    @settings(max_examples=100)
    def test_never_negative_or_nan(self, values: list[float]):
        drawdown = calculate_max_drawdown(values)
        assert math.isfinite(drawdown)
        assert drawdown >= 0

    @given(
        values=st.lists(
            st.floats(min_value=0.0, max_value=100000.0, allow_nan=False, allow_infinity=False),
            min_size=0,
            max_size=50,
        )
    )
    @settings(max_examples=100)
    def test_bounded_for_non_negative_equity(self, values: list[float]):
        drawdown = calculate_max_drawdown(values)
        assert 0 <= drawdown <= 100

    @given(value=pnl_strategy)
    @settings(max_examples=30)
    def test_single_point_is_zero(self, value: float):
        assert calculate_max_drawdown([value]) == 0

    def test_empty_is_zero(self):
        assert calculate_max_drawdown([]) == 0

    def test_zero_curve_is_zero(self):
        assert calculate_max_drawdown([0.0, 0.0, 0.0]) == 0

    def test_negative_start_is_finite(self):
        assert calculate_max_drawdown([-50.0, -80.0, -20.0]) == 0

    def test_recovers_after_peak_turns_positive(self):
        # Peak goes -10 -> 50, then 25 is a 50% drawdown
        assert calculate_max_drawdown([-10.0, 50.0, 25.0]) == 50.0


class TestEndToEndExample:
    """Four trades: +100, -40, -20, +60."""

    def test_example(self):
        trades = make_trades([100.0, -40.0, -20.0, 60.0])

        curve = build_equity_curve(trades)
        assert [p.cumulative_pnl for p in curve] == [100.0, 60.0, 40.0, 100.0]

        assert calculate_max_drawdown([p.cumulative_pnl for p in curve]) == 60.0
        assert drawdown_for_trades(trades) == 60.0

        streak = calculate_current_streak(trades)
        assert (streak.type, streak.count) == ("win", 1)

        info = calculate_streaks(trades)
        assert info.longest_win_streak == 1
        assert info.longest_loss_streak == 2
