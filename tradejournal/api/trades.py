"""Trade journal API."""

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from tradejournal.database import get_session
from tradejournal.models.user import User
from tradejournal.schemas.trade import TradeCreate, TradeFilters, TradeRead
from tradejournal.services import trades as trade_service
from tradejournal.services.fund_accounts import get_fund_account
from tradejournal.api.deps import get_current_user, get_trade_filters

router = APIRouter(prefix="/api/trades", tags=["trades"])


def _check_fund_account(session: Session, user: User, data: TradeCreate):
    if data.fund_account_id is not None and get_fund_account(session, user.id, data.fund_account_id) is None:
        raise HTTPException(status_code=404, detail="Fund account not found")


@router.get("", response_model=list[TradeRead])
def list_trades(
    filters: TradeFilters = Depends(get_trade_filters),
    limit: int | None = None,
    offset: int = 0,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    return trade_service.list_trades(session, user.id, filters, limit=limit, offset=offset)


@router.post("", response_model=TradeRead, status_code=201)
def create_trade(
    data: TradeCreate,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    _check_fund_account(session, user, data)
    return trade_service.create_trade(session, user.id, data)


@router.get("/{trade_id}", response_model=TradeRead)
def get_trade(
    trade_id: int,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    trade = trade_service.get_trade(session, user.id, trade_id)
    if not trade:
        raise HTTPException(status_code=404, detail="Trade not found")
    return trade


@router.put("/{trade_id}", response_model=TradeRead)
def update_trade(
    trade_id: int,
    data: TradeCreate,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    trade = trade_service.get_trade(session, user.id, trade_id)
    if not trade:
        raise HTTPException(status_code=404, detail="Trade not found")
    _check_fund_account(session, user, data)
    return trade_service.update_trade(session, trade, data)


@router.delete("/{trade_id}", status_code=204)
def delete_trade(
    trade_id: int,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    trade = trade_service.get_trade(session, user.id, trade_id)
    if not trade:
        raise HTTPException(status_code=404, detail="Trade not found")
    trade_service.delete_trade(session, trade)
