"""Fund account balance bookkeeping.

A fund account's stored balance is a running total, separate from the equity
curve the analytics rebuild from trades. Every trade records which account
and amount it last folded into a balance (`applied_account_id`,
`applied_pnl`), so re-running an assignment is a no-op and moving a trade
between accounts moves exactly its P&L.
"""

import logging
from datetime import datetime, timezone

from sqlmodel import Session, select

from tradejournal.models.fund_account import FundAccount
from tradejournal.models.trade import Trade
from tradejournal.schemas.fund_account import AssignTradesResult, FundAccountCreate, FundAccountUpdate

logger = logging.getLogger(__name__)


def list_fund_accounts(session: Session, owner_id: int) -> list[FundAccount]:
    """Owner's accounts, newest first."""
    stmt = (
        select(FundAccount)
        .where(FundAccount.owner_id == owner_id)
        .order_by(FundAccount.created_at.desc(), FundAccount.id.desc())
    )
    return list(session.exec(stmt).all())


def get_fund_account(session: Session, owner_id: int, account_id: int) -> FundAccount | None:
    account = session.get(FundAccount, account_id)
    if account is None or account.owner_id != owner_id:
        return None
    return account


def create_fund_account(session: Session, owner_id: int, data: FundAccountCreate) -> FundAccount:
    account = FundAccount(
        owner_id=owner_id,
        name=data.name,
        initial_balance=data.initial_balance,
        balance=data.balance,
    )
    session.add(account)
    session.commit()
    session.refresh(account)
    logger.info(f"Created fund account {account.id} '{account.name}' with balance {account.balance:.2f}")
    return account


def update_fund_account(session: Session, account: FundAccount, data: FundAccountUpdate) -> FundAccount:
    """Rename or re-seed an account. A new initial balance shifts the running balance by the difference."""
    update_data = data.model_dump(exclude_unset=True, exclude_none=True)
    if "initial_balance" in update_data:
        delta = update_data["initial_balance"] - account.initial_balance
        account.balance = round(account.balance + delta, 2)

    for key, value in update_data.items():
        setattr(account, key, value)
    account.updated_at = datetime.now(timezone.utc)

    session.add(account)
    session.commit()
    session.refresh(account)
    return account


def delete_fund_account(session: Session, account: FundAccount):
    account_id = account.id
    session.delete(account)
    session.commit()
    logger.info(f"Deleted fund account {account_id}")


def _adjust_balance(session: Session, account_id: int, amount: float):
    account = session.get(FundAccount, account_id)
    if account is None:
        logger.warning(f"Fund account {account_id} vanished; skipping balance change of {amount:.2f}")
        return
    account.balance = round(account.balance + amount, 2)
    account.updated_at = datetime.now(timezone.utc)
    session.add(account)


def sync_trade_balance(session: Session, trade: Trade) -> bool:
    """Fold a trade's current P&L into its current account, undoing any prior fold.

    Returns True if any balance changed. Does not commit.
    """
    target = trade.fund_account_id
    pnl = trade.realized_pnl if target is not None else 0.0
    if trade.applied_account_id == target and trade.applied_pnl == pnl:
        return False

    if trade.applied_account_id is not None:
        _adjust_balance(session, trade.applied_account_id, -trade.applied_pnl)
    if target is not None:
        _adjust_balance(session, target, pnl)

    trade.applied_account_id = target
    trade.applied_pnl = pnl
    session.add(trade)
    return True


def assign_trades(
    session: Session,
    account: FundAccount,
    trade_ids: list[int],
) -> AssignTradesResult:
    """Book the given trades to `account`. Safe to repeat."""
    starting_balance = account.balance
    assigned = unchanged = 0
    missing: list[int] = []

    for trade_id in dict.fromkeys(trade_ids):
        trade = session.get(Trade, trade_id)
        if trade is None or trade.owner_id != account.owner_id:
            missing.append(trade_id)
            continue
        trade.fund_account_id = account.id
        if sync_trade_balance(session, trade):
            assigned += 1
        else:
            unchanged += 1

    session.commit()
    session.refresh(account)

    logger.info(
        f"Assigned {assigned} trades to fund account {account.id} "
        f"({unchanged} already booked, {len(missing)} not found)"
    )
    return AssignTradesResult(
        total=len(trade_ids),
        assigned=assigned,
        unchanged=unchanged,
        missing=missing,
        balance_change=round(account.balance - starting_balance, 2),
        balance=account.balance,
    )


def recompute_balance(session: Session, account: FundAccount) -> FundAccount:
    """Reset the stored balance to initial balance plus the P&L of its trades.

    This is the only operation that overwrites the running total, and it
    reports any drift it corrects.
    """
    trades = session.exec(select(Trade).where(Trade.fund_account_id == account.id)).all()
    expected = round(account.initial_balance + sum(t.realized_pnl for t in trades), 2)
    drift = round(account.balance - expected, 2)
    if drift:
        logger.warning(f"Fund account {account.id} balance drifted by {drift:.2f}; resetting to {expected:.2f}")

    for trade in trades:
        trade.applied_account_id = account.id
        trade.applied_pnl = trade.realized_pnl
        session.add(trade)

    account.balance = expected
    account.updated_at = datetime.now(timezone.utc)
    session.add(account)
    session.commit()
    session.refresh(account)
    return account


def has_trades(session: Session, account_id: int) -> bool:
    stmt = select(Trade.id).where(Trade.fund_account_id == account_id).limit(1)
    return session.exec(stmt).first() is not None
