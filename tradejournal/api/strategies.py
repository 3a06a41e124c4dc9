"""CRUD API for strategies and their checklists."""

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from tradejournal.database import get_session
from tradejournal.models.user import User
from tradejournal.schemas.strategy import StrategyCreate, StrategyUpdate, StrategyRead
from tradejournal.services import strategies as strategy_service
from tradejournal.api.deps import get_current_user

router = APIRouter(prefix="/api/strategies", tags=["strategies"])


@router.get("", response_model=list[StrategyRead])
def list_strategies(
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    return strategy_service.list_strategies(session, user.id)


@router.post("", response_model=StrategyRead, status_code=201)
def create_strategy(
    data: StrategyCreate,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    if strategy_service.name_taken(session, user.id, data.name):
        raise HTTPException(status_code=409, detail=f"Strategy '{data.name}' already exists")
    return strategy_service.create_strategy(session, user.id, data)


@router.get("/{strategy_id}", response_model=StrategyRead)
def get_strategy(
    strategy_id: int,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    strategy = strategy_service.get_strategy(session, user.id, strategy_id)
    if not strategy:
        raise HTTPException(status_code=404, detail="Strategy not found")
    return strategy


@router.put("/{strategy_id}", response_model=StrategyRead)
def update_strategy(
    strategy_id: int,
    data: StrategyUpdate,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    strategy = strategy_service.get_strategy(session, user.id, strategy_id)
    if not strategy:
        raise HTTPException(status_code=404, detail="Strategy not found")
    if data.name and strategy_service.name_taken(session, user.id, data.name, exclude_id=strategy.id):
        raise HTTPException(status_code=409, detail=f"Strategy '{data.name}' already exists")
    return strategy_service.update_strategy(session, strategy, data)


@router.delete("/{strategy_id}", status_code=204)
def delete_strategy(
    strategy_id: int,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    strategy = strategy_service.get_strategy(session, user.id, strategy_id)
    if not strategy:
        raise HTTPException(status_code=404, detail="Strategy not found")
    strategy_service.delete_strategy(session, strategy)
