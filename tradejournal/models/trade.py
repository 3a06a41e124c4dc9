"""Trade model: one journaled trade, replaced as a whole on edit."""

from datetime import datetime, timezone
from typing import Any

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import JSON


class Trade(SQLModel, table=True):
    __tablename__ = "trade"

    id: int | None = Field(default=None, primary_key=True)
    owner_id: int = Field(foreign_key="user.id", index=True)
    asset: str
    direction: str  # "Long" or "Short"
    strategy: str = Field(default="", index=True)  # Strategy.name, not enforced
    entry_time: datetime = Field(index=True)
    exit_time: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Pricing and sizing
    entry_price: float
    exit_price: float
    position_size: float = 0.0
    stop_loss_price: float | None = None
    reward_target: float | None = None

    # Derived from the prices above on every write
    initial_risk: float = 0.0
    realized_pnl: float = 0.0
    realized_rr: float = 0.0
    expected_rr: float = 0.0
    peak_profit: float = 0.0

    # Derived timing
    entry_hour: int = 0
    day_of_week: int = 0  # 0 = Sunday
    time_in_trade_minutes: int = 0

    # Excursions
    max_favorable_excursion: float | None = None
    max_adverse_excursion: float | None = None
    time_to_peak_minutes: int | None = None

    exit_reason: str = "Manual"  # "SL Hit", "TP Hit", "Manual", "Time Limit"
    emotional_state: str = "Calm"
    checklist: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    is_adherent: bool = Field(default=False, index=True)

    # Write-time sequencing
    trade_number: int = 1
    win_streak: int = 0
    loss_streak: int = 0

    # Market conditions
    volatility: str | None = None
    trend_h1: str | None = None
    trend_m15: str | None = None
    trend_m5: str | None = None
    volume_profile: str | None = None

    # Quality, psychology and review
    confidence_level: int | None = None
    setup_quality: int | None = None
    partial_exit: bool = False
    trailing_stop_used: bool = False
    breakeven_moved: bool = False
    would_trade_again: bool | None = None
    mistakes: str | None = None
    lessons_learned: str | None = None
    what_worked: str | None = None

    # Account context
    account_balance: float | None = None
    risk_percent: float | None = None
    position_size_percent: float | None = None
    max_drawdown: float = 0.0
    fund_account_id: int | None = Field(default=None, foreign_key="fund_account.id", index=True)

    # Account and amount currently folded into a fund account balance
    applied_account_id: int | None = None
    applied_pnl: float = 0.0

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
