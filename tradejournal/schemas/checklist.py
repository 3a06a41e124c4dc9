"""Pydantic schemas for strategy checklist items and per-trade checklist values."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, field_validator


class ChecklistItem(BaseModel):
    """One item of a strategy's checklist definition."""

    id: str = Field(min_length=1, max_length=64)
    label: str = Field(max_length=200)
    type: Literal["checkbox", "text"] = "checkbox"
    # None means "use the type default": checkbox items are required, text items are not
    required: bool | None = None

    @field_validator("label")
    @classmethod
    def _trim_label(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("must not be empty")
        return text

    @property
    def is_required(self) -> bool:
        if self.required is None:
            return self.type == "checkbox"
        return self.required


class CheckboxValue(BaseModel):
    kind: Literal["checkbox"] = "checkbox"
    value: bool = False


class TextValue(BaseModel):
    kind: Literal["text"] = "text"
    value: str = ""


ChecklistValue = Annotated[Union[CheckboxValue, TextValue], Field(discriminator="kind")]


class Checklist(BaseModel):
    """A trade's checklist: confirmations text plus values keyed by item id.

    Item ids are either a strategy's own item ids or the legacy keys in
    ``tradejournal.utils.constants.LEGACY_CHECKLIST_KEYS``. Key order is kept.
    """

    confirmations: str = ""
    items: dict[str, ChecklistValue] = Field(default_factory=dict)

    def value_of(self, item_id: str) -> bool | str | None:
        entry = self.items.get(item_id)
        return entry.value if entry is not None else None
