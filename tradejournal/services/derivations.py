"""Per-trade derived fields and write-time sequencing.

Pure computation; the trade service calls these on every create and update so
that P&L, R:R, risk terms and timing fields are never edited independently of
the prices and times they come from.
"""

from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Any

from tradejournal.utils.numbers import as_number


@dataclass
class DerivedFields:
    initial_risk: float
    realized_pnl: float
    realized_rr: float
    expected_rr: float
    peak_profit: float
    entry_hour: int
    day_of_week: int  # 0 = Sunday
    time_in_trade_minutes: int
    risk_percent: float | None
    position_size_percent: float | None
    max_drawdown: float


@dataclass
class TradeSequence:
    trade_number: int
    win_streak: int
    loss_streak: int


def as_utc(ts: datetime) -> datetime:
    """Naive datetimes are taken as UTC (SQLite drops tzinfo on read)."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def local_time(ts: datetime, tz: tzinfo) -> datetime:
    return as_utc(ts).astimezone(tz)


def derive_timing(entry_time: datetime, exit_time: datetime, tz: tzinfo = timezone.utc) -> tuple[int, int, int]:
    """Return (entry_hour, day_of_week, time_in_trade_minutes)."""
    local_entry = local_time(entry_time, tz)
    minutes = round((as_utc(exit_time) - as_utc(entry_time)).total_seconds() / 60)
    return local_entry.hour, (local_entry.weekday() + 1) % 7, max(0, minutes)


def derive_trade_fields(trade: Any, tz: tzinfo = timezone.utc) -> DerivedFields:
    """Compute every derived field from a trade's raw inputs."""
    entry = as_number(trade.entry_price)
    exit_ = as_number(trade.exit_price)
    size = as_number(trade.position_size)

    pnl = (exit_ - entry) * size

    stop = trade.stop_loss_price
    risk_per_unit = abs(as_number(stop) - entry) if stop is not None else 0.0
    initial_risk = risk_per_unit * size
    realized_rr = pnl / initial_risk if initial_risk > 0 else 0.0

    target = trade.reward_target
    if target is not None and risk_per_unit > 0:
        expected_rr = abs(as_number(target) - entry) / risk_per_unit
    else:
        expected_rr = 0.0

    mfe = trade.max_favorable_excursion
    peak_profit = (as_number(mfe) - entry) * size if mfe is not None and mfe > entry else 0.0

    mae = trade.max_adverse_excursion
    max_drawdown = (entry - as_number(mae)) * size if mae is not None and mae < entry else 0.0

    balance = as_number(trade.account_balance)
    if balance > 0:
        risk_percent = round(initial_risk / balance * 100, 2)
        position_size_percent = round(size * entry / balance * 100, 2)
    else:
        risk_percent = position_size_percent = None

    entry_hour, day_of_week, minutes = derive_timing(trade.entry_time, trade.exit_time, tz)

    return DerivedFields(
        initial_risk=round(initial_risk, 2),
        realized_pnl=round(pnl, 2),
        realized_rr=round(realized_rr, 2),
        expected_rr=round(expected_rr, 2),
        peak_profit=round(peak_profit, 2),
        entry_hour=entry_hour,
        day_of_week=day_of_week,
        time_in_trade_minutes=minutes,
        risk_percent=risk_percent,
        position_size_percent=position_size_percent,
        max_drawdown=round(max_drawdown, 2),
    )


def derive_sequence(
    previous: Any | None,
    realized_pnl: float,
    entry_time: datetime,
    tz: tzinfo = timezone.utc,
) -> TradeSequence:
    """Daily trade number and running streaks relative to the preceding trade.

    `previous` must be the same owner's chronologically preceding trade. A
    win extends the win streak only when `previous` was itself a win (losses
    likewise), so a breakeven in between restarts the count. A breakeven
    trade carries both streaks over unchanged.
    """
    prev_pnl = as_number(getattr(previous, "realized_pnl", None))
    prev_wins = int(as_number(getattr(previous, "win_streak", None)))
    prev_losses = int(as_number(getattr(previous, "loss_streak", None)))

    if realized_pnl > 0:
        win_streak = prev_wins + 1 if prev_pnl > 0 else 1
        loss_streak = 0
    elif realized_pnl < 0:
        win_streak = 0
        loss_streak = prev_losses + 1 if prev_pnl < 0 else 1
    else:
        win_streak, loss_streak = prev_wins, prev_losses

    trade_number = 1
    prev_entry = getattr(previous, "entry_time", None)
    if isinstance(prev_entry, datetime):
        if local_time(prev_entry, tz).date() == local_time(entry_time, tz).date():
            trade_number = int(as_number(previous.trade_number)) + 1

    return TradeSequence(trade_number=trade_number, win_streak=win_streak, loss_streak=loss_streak)
