"""Stateless trade analytics for the journal dashboard.

Every function here reduces an already-fetched list of trades (and, for the
risk summary, fund accounts) into a plain result object. All functions are
pure computation with no I/O or database access, and accept trades in any
order, including duplicates. Missing numeric fields count as 0; a trade that
lacks a field an analysis needs is left out of that analysis instead of
raising.
"""

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from tradejournal.utils.constants import MISTAKE_DELIMITERS, TOP_MISTAKES
from tradejournal.utils.numbers import as_number, is_number

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)
_MISTAKE_SPLIT = re.compile(MISTAKE_DELIMITERS)


# ---------------------------------------------------------------------------
# Field access helpers
# ---------------------------------------------------------------------------

def _pnl(trade: Any) -> float:
    return as_number(getattr(trade, "realized_pnl", None))


def entry_timestamp(trade: Any) -> datetime:
    """Entry time as an aware datetime. Naive values are UTC; missing sorts first."""
    ts = getattr(trade, "entry_time", None)
    if not isinstance(ts, datetime):
        return _EPOCH
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def sort_chronologically(trades: Iterable[Any]) -> list[Any]:
    """Oldest first. Stable, so trades sharing an entry time keep input order."""
    return sorted(trades, key=entry_timestamp)


def _pct(part: int, whole: int) -> float:
    return part / whole * 100 if whole else 0.0


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class TradeMetrics:
    """Top-line dashboard metrics. Rates are percentages."""
    total_trades: int = 0
    overall_pnl: float = 0.0
    win_rate: float = 0.0
    average_rr: float = 0.0
    expectancy: float = 0.0
    adherence_rate: float = 0.0


@dataclass
class StreakStats:
    best_win_streak: int = 0
    worst_loss_streak: int = 0
    current_win_streak: int = 0
    current_loss_streak: int = 0


@dataclass
class RiskSummary:
    avg_risk_percent: float = 0.0
    avg_position_percent: float = 0.0
    avg_drawdown: float = 0.0
    max_drawdown: float = 0.0
    peak_account: float = 0.0
    bottom_account: float = 0.0


@dataclass
class MistakeCount:
    mistake: str
    count: int


@dataclass
class LossInsights:
    most_common_mistakes: list[MistakeCount] = field(default_factory=list)
    confidence_with_most_losses: float | None = None
    setup_quality_with_most_losses: float | None = None
    trade_number_with_most_losses: float | None = None


@dataclass
class EquityPoint:
    """Account equity right after one trade closed."""
    trade_id: int | None
    timestamp: datetime
    equity: float
    drawdown: float


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------

def compute_metrics(trades: Sequence[Any]) -> TradeMetrics:
    """P&L, win rate, average R:R, expectancy and adherence rate."""
    total = len(trades)
    if total == 0:
        return TradeMetrics()

    winners = [t for t in trades if _pnl(t) > 0]
    losers = [t for t in trades if _pnl(t) < 0]
    win_rate = _pct(len(winners), total)
    loss_rate = _pct(len(losers), total)

    avg_win_r = _mean([as_number(getattr(t, "realized_rr", None)) for t in winners])
    avg_loss_r = _mean([abs(as_number(getattr(t, "realized_rr", None))) for t in losers])
    expectancy = (win_rate / 100) * avg_win_r - (loss_rate / 100) * avg_loss_r

    average_rr = sum(as_number(getattr(t, "realized_rr", None)) for t in trades) / total
    adherent = sum(1 for t in trades if getattr(t, "is_adherent", False) is True)

    return TradeMetrics(
        total_trades=total,
        overall_pnl=round(sum(_pnl(t) for t in trades), 2),
        win_rate=round(win_rate, 2),
        average_rr=round(average_rr, 2),
        expectancy=round(expectancy, 2),
        adherence_rate=round(_pct(adherent, total), 2),
    )


# ---------------------------------------------------------------------------
# Streaks
# ---------------------------------------------------------------------------

def compute_streaks(trades: Sequence[Any]) -> StreakStats:
    """Consecutive win/loss runs, walking trades oldest to newest.

    Breakeven trades neither extend nor break a run.
    """
    stats = StreakStats()
    win_streak = loss_streak = 0

    for trade in sort_chronologically(trades):
        pnl = _pnl(trade)
        if pnl > 0:
            win_streak += 1
            loss_streak = 0
        elif pnl < 0:
            loss_streak += 1
            win_streak = 0

        stats.best_win_streak = max(stats.best_win_streak, win_streak)
        stats.worst_loss_streak = max(stats.worst_loss_streak, loss_streak)

    stats.current_win_streak = win_streak
    stats.current_loss_streak = loss_streak
    return stats


# ---------------------------------------------------------------------------
# Risk & drawdown
# ---------------------------------------------------------------------------

@dataclass
class _AccountFold:
    points: list[EquityPoint]
    peak: float
    trough: float


def _seed_balance(account: Any | None, first_trade: Any) -> float:
    if account is not None and is_number(getattr(account, "initial_balance", None)):
        return float(account.initial_balance)
    return as_number(getattr(first_trade, "account_balance", None))


def _fold_account(ordered_trades: Sequence[Any], seed: float) -> _AccountFold:
    """Walk one account's trades, tracking running balance, peak and trough."""
    balance = peak = trough = seed
    points: list[EquityPoint] = []

    for trade in ordered_trades:
        entry_balance = balance
        exit_balance = entry_balance + _pnl(trade)
        peak = max(peak, entry_balance, exit_balance)
        trough = min(trough, entry_balance, exit_balance)
        drawdown = max(0.0, peak - exit_balance)
        points.append(EquityPoint(
            trade_id=getattr(trade, "id", None),
            timestamp=entry_timestamp(trade),
            equity=exit_balance,
            drawdown=drawdown,
        ))
        balance = exit_balance

    return _AccountFold(points=points, peak=peak, trough=trough)


def _group_by_account(trades: Iterable[Any]) -> dict[Any, list[Any]]:
    groups: dict[Any, list[Any]] = {}
    for trade in trades:
        groups.setdefault(trade.fund_account_id, []).append(trade)
    return groups


def compute_risk_summary(trades: Sequence[Any], fund_accounts: Sequence[Any]) -> RiskSummary:
    """Risk sizing averages plus drawdowns from per-account equity curves.

    Only trades carrying a risk %, a position % and a fund account are used.
    Each account's curve is rebuilt on its own, seeded from the account's
    initial balance, since peaks are not comparable across capital pools.
    """
    eligible = [
        t for t in trades
        if is_number(getattr(t, "risk_percent", None))
        and is_number(getattr(t, "position_size_percent", None))
        and getattr(t, "fund_account_id", None) is not None
    ]
    if not eligible:
        return RiskSummary()

    accounts = {a.id: a for a in fund_accounts if getattr(a, "id", None) is not None}

    total_drawdown = 0.0
    drawdown_events = 0
    max_drawdown = 0.0
    peak_account: float | None = None
    bottom_account: float | None = None

    for account_id, account_trades in _group_by_account(eligible).items():
        ordered = sort_chronologically(account_trades)
        fold = _fold_account(ordered, _seed_balance(accounts.get(account_id), ordered[0]))

        for point in fold.points:
            if point.drawdown > 0:
                total_drawdown += point.drawdown
                drawdown_events += 1
                max_drawdown = max(max_drawdown, point.drawdown)

        peak_account = fold.peak if peak_account is None else max(peak_account, fold.peak)
        bottom_account = fold.trough if bottom_account is None else min(bottom_account, fold.trough)

    n = len(eligible)
    return RiskSummary(
        avg_risk_percent=round(sum(t.risk_percent for t in eligible) / n, 2),
        avg_position_percent=round(sum(t.position_size_percent for t in eligible) / n, 2),
        avg_drawdown=round(total_drawdown / drawdown_events, 2) if drawdown_events else 0.0,
        max_drawdown=round(max_drawdown, 2),
        peak_account=round(peak_account, 2) if peak_account is not None else 0.0,
        bottom_account=round(bottom_account, 2) if bottom_account is not None else 0.0,
    )


def build_equity_curve(trades: Sequence[Any], fund_account: Any) -> list[EquityPoint]:
    """Equity after each of the account's trades, using the drawdown fold.

    Unlike the risk summary this takes every trade booked to the account,
    whether or not it carries risk percentages.
    """
    account_id = getattr(fund_account, "id", None)
    ordered = sort_chronologically(
        t for t in trades if getattr(t, "fund_account_id", None) == account_id
    )
    if not ordered:
        return []
    fold = _fold_account(ordered, _seed_balance(fund_account, ordered[0]))
    return [
        EquityPoint(
            trade_id=p.trade_id,
            timestamp=p.timestamp,
            equity=round(p.equity, 2),
            drawdown=round(p.drawdown, 2),
        )
        for p in fold.points
    ]


# ---------------------------------------------------------------------------
# Loss insights
# ---------------------------------------------------------------------------

def split_mistakes(text: Any) -> list[str]:
    """Free-text mistakes field → trimmed, non-empty tokens in original order."""
    if not isinstance(text, str) or not text.strip():
        return []
    return [token.strip() for token in _MISTAKE_SPLIT.split(text) if token.strip()]


def _mode(values: Iterable[Any]) -> float | None:
    """Most frequent numeric value; ties go to the value seen first."""
    counts: dict[float, int] = {}
    for value in values:
        if is_number(value):
            counts[value] = counts.get(value, 0) + 1
    if not counts:
        return None
    # max() keeps the first maximal item and dicts keep insertion order
    return max(counts.items(), key=lambda kv: kv[1])[0]


def compute_loss_insights(trades: Sequence[Any]) -> LossInsights:
    """Recurring mistakes and where losses concentrate among losing trades."""
    losing = [t for t in trades if _pnl(t) < 0]
    if not losing:
        return LossInsights()

    mistake_counts: dict[str, int] = {}
    for trade in losing:
        for mistake in split_mistakes(getattr(trade, "mistakes", None)):
            mistake_counts[mistake] = mistake_counts.get(mistake, 0) + 1

    # sorted() is stable, so equal counts stay in encounter order
    ranked = sorted(mistake_counts.items(), key=lambda kv: kv[1], reverse=True)

    return LossInsights(
        most_common_mistakes=[MistakeCount(mistake=m, count=c) for m, c in ranked[:TOP_MISTAKES]],
        confidence_with_most_losses=_mode(getattr(t, "confidence_level", None) for t in losing),
        setup_quality_with_most_losses=_mode(getattr(t, "setup_quality", None) for t in losing),
        trade_number_with_most_losses=_mode(getattr(t, "trade_number", None) for t in losing),
    )
