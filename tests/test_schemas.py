"""Tests for request schema validation."""

import pytest
from pydantic import ValidationError

from tests.factories import trade_input
from tradejournal.schemas.checklist import Checklist, ChecklistItem
from tradejournal.schemas.fund_account import FundAccountCreate
from tradejournal.schemas.strategy import StrategyCreate, StrategyUpdate


def _item(item_id="1", label="Trend aligned", **extra):
    return {"id": item_id, "label": label, **extra}


# ---------------------------------------------------------------------------
# 1. Strategy
# ---------------------------------------------------------------------------

def test_strategy_trims_name():
    s = StrategyCreate(name="  Breakout ", checklist_items=[_item()])
    assert s.name == "Breakout"


def test_strategy_needs_an_item():
    with pytest.raises(ValidationError):
        StrategyCreate(name="Breakout", checklist_items=[])


def test_strategy_rejects_blank_label():
    with pytest.raises(ValidationError):
        StrategyCreate(name="Breakout", checklist_items=[_item(label="  ")])


def test_strategy_rejects_duplicate_ids():
    with pytest.raises(ValidationError):
        StrategyCreate(name="Breakout", checklist_items=[_item("1"), _item("1", "Other")])


def test_strategy_update_partial():
    assert StrategyUpdate().model_dump(exclude_unset=True) == {}
    with pytest.raises(ValidationError):
        StrategyUpdate(name=" ")


def test_item_required_defaults():
    assert ChecklistItem(**_item(type="checkbox")).is_required is True
    assert ChecklistItem(**_item(type="text")).is_required is False
    assert ChecklistItem(**_item(type="checkbox", required=False)).is_required is False


# ---------------------------------------------------------------------------
# 2. Checklist values
# ---------------------------------------------------------------------------

def test_checklist_tagged_values_keep_order():
    checklist = Checklist.model_validate({
        "confirmations": "ok",
        "items": {
            "b": {"kind": "text", "value": "note"},
            "a": {"kind": "checkbox", "value": True},
        },
    })
    assert list(checklist.items) == ["b", "a"]
    assert checklist.value_of("a") is True
    assert checklist.value_of("b") == "note"
    assert checklist.value_of("missing") is None


def test_checklist_rejects_unknown_kind():
    with pytest.raises(ValidationError):
        Checklist.model_validate({"items": {"a": {"kind": "slider", "value": 3}}})


# ---------------------------------------------------------------------------
# 3. Trade and fund account
# ---------------------------------------------------------------------------

def test_trade_normalizes_asset_and_enums():
    data = trade_input(asset=" btcusd ", strategy=" Breakout ")
    assert data.asset == "BTCUSD"
    assert data.strategy == "Breakout"
    assert data.direction == "Long"
    assert data.exit_reason == "Manual"


@pytest.mark.parametrize("field,value", [
    ("entry_price", -1),
    ("position_size", -0.5),
    ("confidence_level", 11),
    ("setup_quality", 0),
    ("direction", "Sideways"),
    ("asset", "   "),
])
def test_trade_rejects_bad_input(field, value):
    with pytest.raises(ValidationError):
        trade_input(**{field: value})


def test_fund_account_rejects_negative_initial():
    with pytest.raises(ValidationError):
        FundAccountCreate(name="Main", initial_balance=-1)


def test_fund_account_balance_defaults_to_initial():
    assert FundAccountCreate(name="Main", initial_balance=500).balance == 500
    assert FundAccountCreate(name="Main", initial_balance=500, balance=650).balance == 650
