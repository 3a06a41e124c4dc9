"""FundAccount model: a capital pool that trades can be booked against."""

from datetime import datetime, timezone
from sqlmodel import SQLModel, Field


class FundAccount(SQLModel, table=True):
    __tablename__ = "fund_account"

    id: int | None = Field(default=None, primary_key=True)
    owner_id: int = Field(foreign_key="user.id", index=True)
    name: str
    initial_balance: float = 0.0
    # Running total maintained by assignments; not derived live from trades
    balance: float = 0.0
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
