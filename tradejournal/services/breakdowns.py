"""Descriptive breakdowns behind the analytics charts.

Hour-of-day and day-of-week P&L, realized R:R histogram, outcome split,
cumulative P&L and excursion averages. Pure computation over trade lists;
pandas handles the grouping.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Sequence

import numpy as np
import pandas as pd

from tradejournal.services.analytics import entry_timestamp, sort_chronologically
from tradejournal.utils.constants import DAY_NAMES, RR_BUCKETS
from tradejournal.utils.numbers import as_number, is_number

UNASSIGNED_STRATEGY = "Unassigned"


@dataclass
class TimeBucketStat:
    key: str
    trades: int
    avg_pnl: float
    total_pnl: float


@dataclass
class OutcomeCounts:
    total: int = 0
    wins: int = 0
    losses: int = 0
    breakeven: int = 0
    win_rate: float = 0.0
    loss_rate: float = 0.0
    breakeven_rate: float = 0.0


@dataclass
class CumulativePoint:
    trade_id: int | None
    timestamp: datetime
    pnl: float
    cumulative: float


@dataclass
class ExcursionSummary:
    avg_mfe: float = 0.0
    avg_mae: float = 0.0
    avg_peak_profit: float = 0.0
    avg_time_to_peak: float = 0.0


def _hour_of(trade: Any) -> int:
    hour = getattr(trade, "entry_hour", None)
    return int(hour) if is_number(hour) else entry_timestamp(trade).hour


def _day_of(trade: Any) -> int:
    day = getattr(trade, "day_of_week", None)
    return int(day) if is_number(day) else (entry_timestamp(trade).weekday() + 1) % 7


def _frame(trades: Sequence[Any]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "pnl": [as_number(getattr(t, "realized_pnl", None)) for t in trades],
            "rr": [as_number(getattr(t, "realized_rr", None)) for t in trades],
            "hour": [_hour_of(t) for t in trades],
            "day": [_day_of(t) for t in trades],
            "strategy": [getattr(t, "strategy", None) or UNASSIGNED_STRATEGY for t in trades],
        }
    )


def _bucket_stats(df: pd.DataFrame, column: str, label) -> list[TimeBucketStat]:
    grouped = df.groupby(column)["pnl"].agg(["count", "mean", "sum"])
    # mergesort is stable: equal averages stay in hour/day order
    grouped = grouped.sort_values("mean", ascending=False, kind="mergesort")
    return [
        TimeBucketStat(
            key=label(int(key)),
            trades=int(row["count"]),
            avg_pnl=round(float(row["mean"]), 2),
            total_pnl=round(float(row["sum"]), 2),
        )
        for key, row in grouped.iterrows()
    ]


def summarize_by_hour(trades: Sequence[Any]) -> list[TimeBucketStat]:
    """P&L per entry hour, best average first."""
    if not trades:
        return []
    return _bucket_stats(_frame(trades), "hour", lambda hour: f"{hour}:00")


def summarize_by_day(trades: Sequence[Any]) -> list[TimeBucketStat]:
    """P&L per day of week (Sun..Sat), best average first."""
    if not trades:
        return []
    return _bucket_stats(_frame(trades), "day", lambda day: DAY_NAMES[day % 7])


def rr_distribution(trades: Sequence[Any]) -> dict[str, int]:
    """Count of trades per realized R:R bucket; every bucket is present."""
    keys = [key for key, _ in RR_BUCKETS]
    if not trades:
        return {key: 0 for key in keys}
    edges = [lower for _, lower in RR_BUCKETS] + [np.inf]
    buckets = pd.cut(_frame(trades)["rr"], bins=edges, labels=keys, right=False)
    counts = buckets.value_counts().reindex(keys, fill_value=0)
    return {key: int(counts[key]) for key in keys}


def outcome_counts(trades: Sequence[Any]) -> OutcomeCounts:
    total = len(trades)
    if total == 0:
        return OutcomeCounts()
    pnl = _frame(trades)["pnl"]
    wins = int((pnl > 0).sum())
    losses = int((pnl < 0).sum())
    breakeven = total - wins - losses
    return OutcomeCounts(
        total=total,
        wins=wins,
        losses=losses,
        breakeven=breakeven,
        win_rate=round(wins / total * 100, 2),
        loss_rate=round(losses / total * 100, 2),
        breakeven_rate=round(breakeven / total * 100, 2),
    )


def cumulative_pnl(trades: Sequence[Any]) -> list[CumulativePoint]:
    """Running P&L total across all trades, oldest first."""
    ordered = sort_chronologically(trades)
    if not ordered:
        return []
    pnl = pd.Series([as_number(getattr(t, "realized_pnl", None)) for t in ordered])
    running = pnl.cumsum()
    return [
        CumulativePoint(
            trade_id=getattr(trade, "id", None),
            timestamp=entry_timestamp(trade),
            pnl=round(float(pnl.iloc[i]), 2),
            cumulative=round(float(running.iloc[i]), 2),
        )
        for i, trade in enumerate(ordered)
    ]


def summarize_excursions(trades: Sequence[Any]) -> ExcursionSummary:
    """Average MFE, MAE, peak profit and time to peak over trades that track them."""
    tracked = [
        t for t in trades
        if is_number(getattr(t, "max_favorable_excursion", None))
        or is_number(getattr(t, "max_adverse_excursion", None))
        or is_number(getattr(t, "time_to_peak_minutes", None))
        or as_number(getattr(t, "peak_profit", None)) != 0
    ]
    if not tracked:
        return ExcursionSummary()
    df = pd.DataFrame(
        {
            "mfe": [as_number(getattr(t, "max_favorable_excursion", None)) for t in tracked],
            "mae": [as_number(getattr(t, "max_adverse_excursion", None)) for t in tracked],
            "peak": [as_number(getattr(t, "peak_profit", None)) for t in tracked],
            "ttp": [as_number(getattr(t, "time_to_peak_minutes", None)) for t in tracked],
        }
    )
    means = df.mean()
    return ExcursionSummary(
        avg_mfe=round(float(means["mfe"]), 2),
        avg_mae=round(float(means["mae"]), 2),
        avg_peak_profit=round(float(means["peak"]), 2),
        avg_time_to_peak=round(float(means["ttp"]), 2),
    )


def strategy_performance(trades: Sequence[Any]) -> dict[str, float]:
    """Total realized P&L per strategy name."""
    if not trades:
        return {}
    totals = _frame(trades).groupby("strategy", sort=True)["pnl"].sum()
    return {str(name): round(float(total), 2) for name, total in totals.items()}
