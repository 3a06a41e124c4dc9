"""Strategy CRUD and adherence refresh for the trades that reference a strategy."""

import logging
from datetime import datetime, timezone

from sqlmodel import Session, select

from tradejournal.models.strategy import Strategy
from tradejournal.models.trade import Trade
from tradejournal.schemas.strategy import StrategyCreate, StrategyUpdate
from tradejournal.services.adherence import evaluate_adherence

logger = logging.getLogger(__name__)


def list_strategies(session: Session, owner_id: int) -> list[Strategy]:
    stmt = select(Strategy).where(Strategy.owner_id == owner_id).order_by(Strategy.name)
    return list(session.exec(stmt).all())


def get_strategy(session: Session, owner_id: int, strategy_id: int) -> Strategy | None:
    strategy = session.get(Strategy, strategy_id)
    if strategy is None or strategy.owner_id != owner_id:
        return None
    return strategy


def name_taken(session: Session, owner_id: int, name: str, exclude_id: int | None = None) -> bool:
    stmt = select(Strategy.id).where(Strategy.owner_id == owner_id, Strategy.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Strategy.id != exclude_id)
    return session.exec(stmt).first() is not None


def create_strategy(session: Session, owner_id: int, data: StrategyCreate) -> Strategy:
    strategy = Strategy(
        owner_id=owner_id,
        name=data.name,
        checklist_items=[item.model_dump() for item in data.checklist_items],
        confirmations_placeholder=data.confirmations_placeholder,
    )
    session.add(strategy)
    session.commit()
    session.refresh(strategy)
    refresh_adherence(session, strategy)
    logger.info(f"Created strategy '{strategy.name}' with {len(strategy.checklist_items)} items")
    return strategy


def update_strategy(session: Session, strategy: Strategy, data: StrategyUpdate) -> Strategy:
    """Apply a partial update, then re-evaluate adherence of trades using this strategy."""
    update_data = data.model_dump(exclude_unset=True, exclude_none=True)
    if "checklist_items" in update_data:
        update_data["checklist_items"] = [item.model_dump() for item in data.checklist_items]

    for key, value in update_data.items():
        setattr(strategy, key, value)
    strategy.updated_at = datetime.now(timezone.utc)

    session.add(strategy)
    session.commit()
    session.refresh(strategy)

    refresh_adherence(session, strategy)
    return strategy


def delete_strategy(session: Session, strategy: Strategy):
    """Delete the definition only; trades keep the strategy name they were logged with."""
    name = strategy.name
    session.delete(strategy)
    session.commit()
    logger.info(f"Deleted strategy '{name}'")


def refresh_adherence(session: Session, strategy: Strategy) -> int:
    """Recompute `is_adherent` on the owner's trades that reference `strategy`.

    Returns the number of trades whose flag changed.
    """
    trades = session.exec(
        select(Trade).where(Trade.owner_id == strategy.owner_id, Trade.strategy == strategy.name)
    ).all()

    changed = 0
    for trade in trades:
        adherent = evaluate_adherence(trade.checklist, strategy)
        if adherent != trade.is_adherent:
            trade.is_adherent = adherent
            session.add(trade)
            changed += 1

    if changed:
        session.commit()
        logger.info(f"Strategy '{strategy.name}': adherence changed on {changed} of {len(trades)} trades")
    return changed
