"""Trade persistence: filtered listing, create, full-replace update, delete.

Derived fields, adherence and sequencing are always recomputed here so that
what is stored never disagrees with the prices, times and checklist it came
from.
"""

import logging
from datetime import datetime, time, timezone
from zoneinfo import ZoneInfo

from sqlmodel import Session, select

from tradejournal.config import settings
from tradejournal.models.strategy import Strategy
from tradejournal.models.trade import Trade
from tradejournal.schemas.trade import TradeCreate, TradeFilters
from tradejournal.services.adherence import evaluate_adherence
from tradejournal.services.derivations import as_utc, derive_sequence, derive_trade_fields
from tradejournal.services.fund_accounts import sync_trade_balance

logger = logging.getLogger(__name__)


def journal_tz() -> ZoneInfo:
    return ZoneInfo(settings.timezone)


def list_trades(
    session: Session,
    owner_id: int,
    filters: TradeFilters | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> list[Trade]:
    """Owner's trades matching `filters`, newest entry first."""
    stmt = select(Trade).where(Trade.owner_id == owner_id)
    if filters is not None:
        if filters.strategy:
            stmt = stmt.where(Trade.strategy == filters.strategy)
        if filters.direction:
            stmt = stmt.where(Trade.direction == filters.direction)
        if filters.is_adherent is not None:
            stmt = stmt.where(Trade.is_adherent == filters.is_adherent)
        if filters.fund_account_id is not None:
            stmt = stmt.where(Trade.fund_account_id == filters.fund_account_id)
        tz = journal_tz()
        if filters.start_date is not None:
            start = datetime.combine(filters.start_date, time.min, tzinfo=tz)
            stmt = stmt.where(Trade.entry_time >= as_utc(start))
        if filters.end_date is not None:
            # Whole end day is included
            end = datetime.combine(filters.end_date, time.max, tzinfo=tz)
            stmt = stmt.where(Trade.entry_time <= as_utc(end))

    stmt = stmt.order_by(Trade.entry_time.desc(), Trade.id.desc()).offset(offset)
    if limit is not None:
        stmt = stmt.limit(limit)
    return list(session.exec(stmt).all())


def get_trade(session: Session, owner_id: int, trade_id: int) -> Trade | None:
    trade = session.get(Trade, trade_id)
    if trade is None or trade.owner_id != owner_id:
        return None
    return trade


def find_strategy(session: Session, owner_id: int, name: str) -> Strategy | None:
    if not name:
        return None
    stmt = select(Strategy).where(Strategy.owner_id == owner_id, Strategy.name == name)
    return session.exec(stmt).first()


def _previous_trade(session: Session, owner_id: int, entry_time: datetime) -> Trade | None:
    """Owner's latest trade entered no later than `entry_time`."""
    stmt = (
        select(Trade)
        .where(Trade.owner_id == owner_id, Trade.entry_time <= entry_time)
        .order_by(Trade.entry_time.desc(), Trade.id.desc())
        .limit(1)
    )
    return session.exec(stmt).first()


def _apply_inputs(session: Session, trade: Trade, data: TradeCreate):
    """Copy raw inputs onto `trade` and recompute everything derived from them."""
    for key, value in data.model_dump(exclude={"entry_time", "exit_time"}).items():
        setattr(trade, key, value)
    trade.entry_time = as_utc(data.entry_time)
    trade.exit_time = as_utc(data.exit_time)

    derived = derive_trade_fields(trade, journal_tz())
    for key, value in vars(derived).items():
        setattr(trade, key, value)

    strategy = find_strategy(session, trade.owner_id, trade.strategy)
    trade.is_adherent = evaluate_adherence(data.checklist, strategy)


def create_trade(session: Session, owner_id: int, data: TradeCreate) -> Trade:
    trade = Trade(owner_id=owner_id, asset=data.asset, direction=data.direction,
                  entry_time=data.entry_time, entry_price=data.entry_price,
                  exit_price=data.exit_price)
    _apply_inputs(session, trade, data)

    previous = _previous_trade(session, owner_id, trade.entry_time)
    sequence = derive_sequence(previous, trade.realized_pnl, trade.entry_time, journal_tz())
    trade.trade_number = sequence.trade_number
    trade.win_streak = sequence.win_streak
    trade.loss_streak = sequence.loss_streak

    session.add(trade)
    sync_trade_balance(session, trade)
    session.commit()
    session.refresh(trade)

    logger.info(
        f"Saved trade {trade.id} for user {owner_id}: {trade.asset} {trade.direction} "
        f"PnL={trade.realized_pnl:.2f} #{trade.trade_number}"
    )
    return trade


def update_trade(session: Session, trade: Trade, data: TradeCreate) -> Trade:
    """Replace every input field; sequencing from the original write is kept."""
    _apply_inputs(session, trade, data)
    trade.updated_at = datetime.now(timezone.utc)

    session.add(trade)
    sync_trade_balance(session, trade)
    session.commit()
    session.refresh(trade)

    logger.info(f"Updated trade {trade.id}: PnL={trade.realized_pnl:.2f} adherent={trade.is_adherent}")
    return trade


def delete_trade(session: Session, trade: Trade):
    """Delete a trade, first taking its P&L back out of any account balance."""
    trade_id = trade.id
    trade.fund_account_id = None
    sync_trade_balance(session, trade)
    session.delete(trade)
    session.commit()
    logger.info(f"Deleted trade {trade_id}")
