"""Checklist adherence: did a trade satisfy its strategy's required items?

The flag is derived, never set by the user. It is recomputed whenever a
trade's checklist changes and whenever the strategy's item list changes.
"""

from typing import Any

from tradejournal.schemas.checklist import Checklist, ChecklistItem
from tradejournal.utils.constants import LEGACY_CHECKLIST_KEYS


def _as_checklist(checklist: Checklist | dict | None) -> Checklist:
    if isinstance(checklist, Checklist):
        return checklist
    return Checklist.model_validate(checklist or {})


def _strategy_items(strategy: Any) -> list[ChecklistItem]:
    items = getattr(strategy, "checklist_items", None) or []
    return [
        item if isinstance(item, ChecklistItem) else ChecklistItem.model_validate(item)
        for item in items
    ]


def _item_satisfied(item: ChecklistItem, value: bool | str | None) -> bool:
    if item.type == "checkbox":
        return value is True
    return isinstance(value, str) and value.strip() != ""


def evaluate_adherence(checklist: Checklist | dict | None, strategy: Any = None) -> bool:
    """Return True when every required item holds and confirmations are filled in.

    Without a strategy the four legacy flags must all be ticked. With one,
    only items marked required count (checkbox items are required unless
    explicitly marked otherwise); optional items never block adherence.
    """
    checklist = _as_checklist(checklist)
    if not checklist.confirmations.strip():
        return False

    if strategy is None:
        return all(checklist.value_of(key) is True for key in LEGACY_CHECKLIST_KEYS)

    return all(
        _item_satisfied(item, checklist.value_of(item.id))
        for item in _strategy_items(strategy)
        if item.is_required
    )
