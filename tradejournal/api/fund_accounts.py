"""Fund accounts API: CRUD, trade assignment and balance recompute."""

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from tradejournal.database import get_session
from tradejournal.models.fund_account import FundAccount
from tradejournal.models.user import User
from tradejournal.schemas.fund_account import (
    AssignTradesRequest,
    AssignTradesResult,
    FundAccountCreate,
    FundAccountRead,
    FundAccountUpdate,
)
from tradejournal.services import fund_accounts as account_service
from tradejournal.api.deps import get_current_user

router = APIRouter(prefix="/api/fund-accounts", tags=["fund-accounts"])


def _get_or_404(session: Session, user: User, account_id: int) -> FundAccount:
    account = account_service.get_fund_account(session, user.id, account_id)
    if not account:
        raise HTTPException(status_code=404, detail="Fund account not found")
    return account


@router.get("", response_model=list[FundAccountRead])
def list_fund_accounts(
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    return account_service.list_fund_accounts(session, user.id)


@router.post("", response_model=FundAccountRead, status_code=201)
def create_fund_account(
    data: FundAccountCreate,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    return account_service.create_fund_account(session, user.id, data)


@router.get("/{account_id}", response_model=FundAccountRead)
def get_fund_account(
    account_id: int,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    return _get_or_404(session, user, account_id)


@router.put("/{account_id}", response_model=FundAccountRead)
def update_fund_account(
    account_id: int,
    data: FundAccountUpdate,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    account = _get_or_404(session, user, account_id)
    return account_service.update_fund_account(session, account, data)


@router.delete("/{account_id}", status_code=204)
def delete_fund_account(
    account_id: int,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    account = _get_or_404(session, user, account_id)
    if account_service.has_trades(session, account.id):
        raise HTTPException(
            status_code=409,
            detail="Cannot delete fund account with assigned trades. Reassign them first.",
        )
    account_service.delete_fund_account(session, account)


@router.post("/{account_id}/assign", response_model=AssignTradesResult)
def assign_trades(
    account_id: int,
    body: AssignTradesRequest,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    account = _get_or_404(session, user, account_id)
    return account_service.assign_trades(session, account, body.trade_ids)


@router.post("/{account_id}/recompute", response_model=FundAccountRead)
def recompute_balance(
    account_id: int,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    account = _get_or_404(session, user, account_id)
    return account_service.recompute_balance(session, account)
