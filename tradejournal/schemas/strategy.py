"""Pydantic schemas for Strategy API."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from tradejournal.schemas.checklist import ChecklistItem


def _check_unique_ids(items: list[ChecklistItem]) -> list[ChecklistItem]:
    seen: set[str] = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"duplicate checklist item id: {item.id}")
        seen.add(item.id)
    return items


class StrategyCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    checklist_items: list[ChecklistItem] = Field(min_length=1)
    confirmations_placeholder: str = Field(default="", max_length=500)

    @field_validator("name")
    @classmethod
    def _trim_name(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("must not be empty")
        return text

    @field_validator("checklist_items")
    @classmethod
    def _validate_items(cls, value: list[ChecklistItem]) -> list[ChecklistItem]:
        return _check_unique_ids(value)


class StrategyUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    checklist_items: list[ChecklistItem] | None = Field(default=None, min_length=1)
    confirmations_placeholder: str | None = Field(default=None, max_length=500)

    @field_validator("name")
    @classmethod
    def _trim_optional_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not text:
            raise ValueError("must not be empty")
        return text

    @field_validator("checklist_items")
    @classmethod
    def _validate_optional_items(cls, value: list[ChecklistItem] | None) -> list[ChecklistItem] | None:
        if value is None:
            return None
        return _check_unique_ids(value)


class StrategyRead(BaseModel):
    id: int
    name: str
    checklist_items: list[ChecklistItem]
    confirmations_placeholder: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
