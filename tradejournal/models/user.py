"""User model: a journal owner. Trades, strategies and fund accounts are scoped to one."""

from datetime import datetime, timezone
from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True)  # JWT subject
    hashed_password: str  # bcrypt
    totp_secret: str  # base32, provisioned by `tradejournal.cli create-user`
    is_active: bool = Field(default=True)  # inactive owners cannot log in or use tokens
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
