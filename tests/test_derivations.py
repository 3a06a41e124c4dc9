"""Tests for per-trade derived fields and write-time sequencing."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from zoneinfo import ZoneInfo

from tests.factories import BASE_TIME, trade_input
from tradejournal.services.derivations import derive_sequence, derive_timing, derive_trade_fields


# ---------------------------------------------------------------------------
# 1. Prices, risk and ratios
# ---------------------------------------------------------------------------

def test_long_trade_fields():
    d = derive_trade_fields(trade_input())
    assert d.realized_pnl == 20.0
    assert d.initial_risk == 10.0
    assert d.realized_rr == 2.0
    assert d.expected_rr == 4.0
    assert d.risk_percent == 1.0
    assert d.position_size_percent == 20.0


def test_no_stop_means_no_risk():
    d = derive_trade_fields(trade_input(stop_loss_price=None))
    assert d.initial_risk == 0
    assert d.realized_rr == 0
    assert d.expected_rr == 0
    assert d.risk_percent == 0


def test_stop_at_entry_guards_division():
    d = derive_trade_fields(trade_input(stop_loss_price=100.0))
    assert d.realized_rr == 0
    assert d.expected_rr == 0


def test_percentages_need_account_balance():
    d = derive_trade_fields(trade_input(account_balance=None))
    assert d.risk_percent is None
    assert d.position_size_percent is None


def test_excursions():
    d = derive_trade_fields(trade_input(max_favorable_excursion=115.0, max_adverse_excursion=97.5))
    assert d.peak_profit == 30.0
    assert d.max_drawdown == 5.0


def test_excursions_on_wrong_side_are_zero():
    d = derive_trade_fields(trade_input(max_favorable_excursion=90.0, max_adverse_excursion=101.0))
    assert d.peak_profit == 0
    assert d.max_drawdown == 0


def test_values_are_rounded():
    d = derive_trade_fields(trade_input(entry_price=1.23456, exit_price=1.23789,
                                        position_size=1000, stop_loss_price=1.23111))
    assert d.realized_pnl == 3.33
    assert d.initial_risk == 3.45


# ---------------------------------------------------------------------------
# 2. Timing
# ---------------------------------------------------------------------------

def test_timing_in_utc():
    hour, day, minutes = derive_timing(BASE_TIME, BASE_TIME + timedelta(minutes=45))
    assert (hour, day, minutes) == (9, 1, 45)


def test_timing_uses_journal_timezone():
    entry = datetime(2024, 3, 3, 23, 30, tzinfo=timezone.utc)  # Sunday
    hour, day, _ = derive_timing(entry, entry, ZoneInfo("Asia/Tokyo"))
    assert (hour, day) == (8, 1)


def test_naive_times_are_utc_and_negative_duration_clamped():
    entry = datetime(2024, 3, 9, 14, 0)  # Saturday
    hour, day, minutes = derive_timing(entry, entry - timedelta(minutes=5))
    assert (hour, day, minutes) == (14, 6, 0)


# ---------------------------------------------------------------------------
# 3. Sequencing
# ---------------------------------------------------------------------------

def _prev(minutes_before: int, pnl=0.0, trade_number=1, win_streak=0, loss_streak=0):
    return SimpleNamespace(entry_time=BASE_TIME - timedelta(minutes=minutes_before),
                           realized_pnl=pnl,
                           trade_number=trade_number, win_streak=win_streak,
                           loss_streak=loss_streak)


def test_first_trade():
    assert vars(derive_sequence(None, 10.0, BASE_TIME)) == {
        "trade_number": 1, "win_streak": 1, "loss_streak": 0,
    }
    assert vars(derive_sequence(None, 0.0, BASE_TIME)) == {
        "trade_number": 1, "win_streak": 0, "loss_streak": 0,
    }


def test_same_day_increments_trade_number():
    seq = derive_sequence(_prev(60, pnl=8.0, trade_number=2, win_streak=2), 5.0, BASE_TIME)
    assert (seq.trade_number, seq.win_streak, seq.loss_streak) == (3, 3, 0)


def test_new_day_resets_trade_number():
    seq = derive_sequence(_prev(60 * 24, trade_number=4), 5.0, BASE_TIME)
    assert seq.trade_number == 1


def test_loss_resets_win_streak():
    seq = derive_sequence(_prev(5, pnl=4.0, win_streak=3), -5.0, BASE_TIME)
    assert (seq.win_streak, seq.loss_streak) == (0, 1)


def test_breakeven_carries_streaks():
    seq = derive_sequence(_prev(5, pnl=-3.0, win_streak=0, loss_streak=2), 0.0, BASE_TIME)
    assert (seq.win_streak, seq.loss_streak) == (0, 2)


def test_win_after_breakeven_restarts_streak():
    # W, BE, W: the breakeven copied win_streak=1 but the next win starts over
    seq = derive_sequence(_prev(5, pnl=0.0, win_streak=1), 12.0, BASE_TIME)
    assert (seq.win_streak, seq.loss_streak) == (1, 0)


def test_loss_after_breakeven_restarts_streak():
    seq = derive_sequence(_prev(5, pnl=0.0, loss_streak=3), -2.0, BASE_TIME)
    assert (seq.win_streak, seq.loss_streak) == (0, 1)


def test_consecutive_losses_extend_streak():
    seq = derive_sequence(_prev(5, pnl=-1.0, loss_streak=2), -2.0, BASE_TIME)
    assert (seq.win_streak, seq.loss_streak) == (0, 3)


def test_same_day_judged_in_journal_timezone():
    # 23:00 and 01:00 UTC are the same New York day
    prev = SimpleNamespace(entry_time=datetime(2024, 3, 4, 23, 0, tzinfo=timezone.utc),
                           trade_number=1, win_streak=0, loss_streak=0)
    entry = datetime(2024, 3, 5, 1, 0, tzinfo=timezone.utc)
    assert derive_sequence(prev, 1.0, entry).trade_number == 1
    assert derive_sequence(prev, 1.0, entry, ZoneInfo("America/New_York")).trade_number == 2
