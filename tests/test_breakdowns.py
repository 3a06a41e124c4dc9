"""Tests for the chart breakdowns built on pandas."""

from tests.factories import trade
from tradejournal.services.breakdowns import (
    OutcomeCounts,
    cumulative_pnl,
    outcome_counts,
    rr_distribution,
    strategy_performance,
    summarize_by_day,
    summarize_by_hour,
    summarize_excursions,
)


def test_by_hour_sorted_by_average():
    trades = [
        trade(10, entry_hour=9),
        trade(30, entry_hour=9),
        trade(50, entry_hour=14),
        trade(-20, entry_hour=16),
    ]
    stats = summarize_by_hour(trades)
    assert [s.key for s in stats] == ["14:00", "9:00", "16:00"]
    assert stats[1].trades == 2
    assert stats[1].avg_pnl == 20
    assert stats[1].total_pnl == 40


def test_by_hour_falls_back_to_entry_time():
    # BASE_TIME is 09:30 UTC
    stats = summarize_by_hour([trade(5)])
    assert stats[0].key == "9:00"


def test_by_day_uses_names():
    trades = [trade(-5, day_of_week=0), trade(15, day_of_week=5)]
    assert [s.key for s in summarize_by_day(trades)] == ["Fri", "Sun"]


def test_rr_distribution_every_bucket_present():
    trades = [trade(0, realized_rr=rr) for rr in (-1.0, 0.0, 0.5, 1.0, 2.5, 3.0, 7.2)]
    assert rr_distribution(trades) == {"<0": 1, "0-1": 2, "1-2": 1, "2-3": 1, ">3": 2}


def test_rr_distribution_empty():
    assert rr_distribution([]) == {"<0": 0, "0-1": 0, "1-2": 0, "2-3": 0, ">3": 0}


def test_outcome_rates_sum_to_hundred():
    counts = outcome_counts([trade(5), trade(-1), trade(0), trade(2)])
    assert (counts.wins, counts.losses, counts.breakeven) == (2, 1, 1)
    assert counts.win_rate + counts.loss_rate + counts.breakeven_rate == 100
    assert outcome_counts([]) == OutcomeCounts()


def test_cumulative_pnl_in_time_order():
    trades = [trade(-5, 20, id=3), trade(10, 0, id=1), trade(7.5, 10, id=2)]
    points = cumulative_pnl(trades)
    assert [p.trade_id for p in points] == [1, 2, 3]
    assert [p.cumulative for p in points] == [10, 17.5, 12.5]


def test_excursions_average_tracked_trades_only():
    trades = [
        trade(1, max_favorable_excursion=110.0, max_adverse_excursion=95.0,
              peak_profit=20.0, time_to_peak_minutes=30),
        trade(1, max_favorable_excursion=120.0, max_adverse_excursion=99.0,
              peak_profit=40.0, time_to_peak_minutes=10),
        trade(1),
    ]
    summary = summarize_excursions(trades)
    assert summary.avg_mfe == 115
    assert summary.avg_mae == 97
    assert summary.avg_peak_profit == 30
    assert summary.avg_time_to_peak == 20


def test_strategy_performance_groups_unassigned():
    trades = [trade(10, strategy="Breakout"), trade(-4, strategy="Breakout"), trade(3)]
    assert strategy_performance(trades) == {"Breakout": 6, "Unassigned": 3}
