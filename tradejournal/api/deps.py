"""Shared API dependencies: the calling journal owner and trade filters."""

from datetime import date

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from tradejournal.database import get_session
from tradejournal.models.user import User
from tradejournal.schemas.trade import TradeFilters
from tradejournal.services.auth import decode_access_token, find_active_user
from tradejournal.utils.constants import Direction

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User:
    """Resolve the bearer token to an active user; every journal query is scoped to them."""
    username = decode_access_token(credentials.credentials) if credentials else None
    if username is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user = find_active_user(session, username)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive",
        )
    return user


def get_trade_filters(
    strategy: str | None = None,
    direction: Direction | None = None,
    is_adherent: bool | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    fund_account_id: int | None = None,
) -> TradeFilters:
    """Query-string filters shared by the trade list and analytics endpoints."""
    if start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=422, detail="start_date must not be after end_date")
    return TradeFilters(
        strategy=strategy or None,
        direction=direction,
        is_adherent=is_adherent,
        start_date=start_date,
        end_date=end_date,
        fund_account_id=fund_account_id,
    )
