"""Strategy model: a named, user-defined pre-trade checklist."""

from datetime import datetime, timezone
from typing import Any

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import JSON, UniqueConstraint


class Strategy(SQLModel, table=True):
    __tablename__ = "strategy"
    __table_args__ = (UniqueConstraint("owner_id", "name", name="uq_strategy_owner_name"),)

    id: int | None = Field(default=None, primary_key=True)
    owner_id: int = Field(foreign_key="user.id", index=True)
    name: str = Field(index=True)  # trades reference strategies by this name
    # Ordered list of {"id", "label", "type", "required"}
    checklist_items: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    confirmations_placeholder: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
