"""Tests for strategy CRUD and adherence refresh."""

from tests.factories import trade_input
from tradejournal.schemas.strategy import StrategyCreate, StrategyUpdate
from tradejournal.services import strategies as strategy_service
from tradejournal.services import trades as trade_service

CHECKLIST = {
    "confirmations": "Sweep then reclaim",
    "items": {
        "1": {"kind": "checkbox", "value": True},
        "2": {"kind": "checkbox", "value": False},
    },
}


def _strategy_data(required_second: bool = False, name: str = "Reversal"):
    return StrategyCreate(
        name=name,
        checklist_items=[
            {"id": "1", "label": "Liquidity swept", "type": "checkbox", "required": True},
            {"id": "2", "label": "Divergence", "type": "checkbox", "required": required_second},
        ],
    )


def test_create_refreshes_existing_trades(session, user):
    trade = trade_service.create_trade(session, user.id, trade_input(strategy="Reversal", checklist=CHECKLIST))
    assert trade.is_adherent is False  # legacy keys are absent

    strategy_service.create_strategy(session, user.id, _strategy_data())
    session.refresh(trade)
    assert trade.is_adherent is True


def test_making_item_required_flips_adherence(session, user):
    strategy = strategy_service.create_strategy(session, user.id, _strategy_data())
    trade = trade_service.create_trade(session, user.id, trade_input(strategy="Reversal", checklist=CHECKLIST))
    assert trade.is_adherent is True

    update = StrategyUpdate(checklist_items=_strategy_data(required_second=True).checklist_items)
    strategy_service.update_strategy(session, strategy, update)
    session.refresh(trade)
    assert trade.is_adherent is False


def test_delete_leaves_trades_untouched(session, user):
    strategy = strategy_service.create_strategy(session, user.id, _strategy_data())
    trade = trade_service.create_trade(session, user.id, trade_input(strategy="Reversal", checklist=CHECKLIST))

    strategy_service.delete_strategy(session, strategy)
    session.refresh(trade)

    assert trade.strategy == "Reversal"
    assert trade.is_adherent is True


def test_name_taken_excludes_self(session, user):
    strategy = strategy_service.create_strategy(session, user.id, _strategy_data())
    assert strategy_service.name_taken(session, user.id, "Reversal") is True
    assert strategy_service.name_taken(session, user.id, "Reversal", exclude_id=strategy.id) is False
    assert strategy_service.name_taken(session, user.id + 1, "Reversal") is False
