"""Analytics API: dashboard metrics, performance insights and chart breakdowns.

Every endpoint accepts the same filters as the trade list and hands the
resolved trades to the pure functions in `tradejournal.services.analytics`
and `tradejournal.services.breakdowns`.
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from tradejournal.database import get_session
from tradejournal.models.user import User
from tradejournal.schemas.trade import TradeFilters
from tradejournal.services import analytics, breakdowns
from tradejournal.services.fund_accounts import get_fund_account, list_fund_accounts
from tradejournal.services.trades import list_trades
from tradejournal.api.deps import get_current_user, get_trade_filters

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("/metrics")
def metrics(
    filters: TradeFilters = Depends(get_trade_filters),
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    return asdict(analytics.compute_metrics(list_trades(session, user.id, filters)))


@router.get("/streaks")
def streaks(
    filters: TradeFilters = Depends(get_trade_filters),
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    return asdict(analytics.compute_streaks(list_trades(session, user.id, filters)))


@router.get("/risk")
def risk(
    filters: TradeFilters = Depends(get_trade_filters),
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    trades = list_trades(session, user.id, filters)
    accounts = list_fund_accounts(session, user.id)
    return asdict(analytics.compute_risk_summary(trades, accounts))


@router.get("/loss-insights")
def loss_insights(
    filters: TradeFilters = Depends(get_trade_filters),
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    return asdict(analytics.compute_loss_insights(list_trades(session, user.id, filters)))


@router.get("/breakdowns")
def chart_breakdowns(
    filters: TradeFilters = Depends(get_trade_filters),
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """All chart series for the filtered trades in one response."""
    trades = list_trades(session, user.id, filters)
    return {
        "by_hour": [asdict(s) for s in breakdowns.summarize_by_hour(trades)],
        "by_day": [asdict(s) for s in breakdowns.summarize_by_day(trades)],
        "rr_distribution": breakdowns.rr_distribution(trades),
        "outcomes": asdict(breakdowns.outcome_counts(trades)),
        "cumulative": [
            {**asdict(p), "timestamp": p.timestamp.isoformat()}
            for p in breakdowns.cumulative_pnl(trades)
        ],
        "excursions": asdict(breakdowns.summarize_excursions(trades)),
        "strategies": breakdowns.strategy_performance(trades),
    }


@router.get("/equity/{account_id}")
def equity_curve(
    account_id: int,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """Equity and drawdown after each trade booked to one fund account."""
    account = get_fund_account(session, user.id, account_id)
    if not account:
        raise HTTPException(status_code=404, detail="Fund account not found")
    trades = list_trades(session, user.id, TradeFilters(fund_account_id=account.id))
    return [
        {
            "trade_id": p.trade_id,
            "timestamp": p.timestamp.isoformat(),
            "equity": p.equity,
            "drawdown": p.drawdown,
        }
        for p in analytics.build_equity_curve(trades, account)
    ]
