"""Pydantic schemas for Trade API."""

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from tradejournal.schemas.checklist import Checklist
from tradejournal.utils.constants import (
    Direction,
    EmotionalState,
    ExitReason,
    Trend,
    Volatility,
    VolumeProfile,
)


class TradeCreate(BaseModel):
    """Raw trade inputs. Derived fields are computed server-side and never accepted."""

    model_config = {"use_enum_values": True, "validate_default": True}

    asset: str = Field(min_length=1, max_length=32)
    direction: Direction
    strategy: str = Field(default="", max_length=120)
    entry_time: datetime
    exit_time: datetime

    entry_price: float = Field(ge=0)
    exit_price: float = Field(ge=0)
    position_size: float = Field(default=0.0, ge=0)
    stop_loss_price: float | None = Field(default=None, ge=0)
    reward_target: float | None = Field(default=None, ge=0)

    max_favorable_excursion: float | None = Field(default=None, ge=0)
    max_adverse_excursion: float | None = Field(default=None, ge=0)
    time_to_peak_minutes: int | None = Field(default=None, ge=0)

    exit_reason: ExitReason = ExitReason.MANUAL
    emotional_state: EmotionalState = EmotionalState.CALM
    checklist: Checklist = Field(default_factory=Checklist)

    volatility: Volatility | None = None
    trend_h1: Trend | None = None
    trend_m15: Trend | None = None
    trend_m5: Trend | None = None
    volume_profile: VolumeProfile | None = None

    confidence_level: int | None = Field(default=None, ge=1, le=10)
    setup_quality: int | None = Field(default=None, ge=1, le=10)
    partial_exit: bool = False
    trailing_stop_used: bool = False
    breakeven_moved: bool = False
    would_trade_again: bool | None = None
    mistakes: str | None = Field(default=None, max_length=2000)
    lessons_learned: str | None = Field(default=None, max_length=2000)
    what_worked: str | None = Field(default=None, max_length=2000)

    account_balance: float | None = Field(default=None, ge=0)
    fund_account_id: int | None = None

    @field_validator("asset")
    @classmethod
    def _trim_asset(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("must not be empty")
        return text.upper()

    @field_validator("strategy")
    @classmethod
    def _trim_strategy(cls, value: str) -> str:
        return value.strip()


class TradeRead(BaseModel):
    id: int
    asset: str
    direction: str
    strategy: str
    entry_time: datetime
    exit_time: datetime
    entry_price: float
    exit_price: float
    position_size: float
    stop_loss_price: float | None
    reward_target: float | None
    initial_risk: float
    realized_pnl: float
    realized_rr: float
    expected_rr: float
    peak_profit: float
    entry_hour: int
    day_of_week: int
    time_in_trade_minutes: int
    max_favorable_excursion: float | None
    max_adverse_excursion: float | None
    time_to_peak_minutes: int | None
    exit_reason: str
    emotional_state: str
    checklist: Checklist
    is_adherent: bool
    trade_number: int
    win_streak: int
    loss_streak: int
    volatility: str | None
    trend_h1: str | None
    trend_m15: str | None
    trend_m5: str | None
    volume_profile: str | None
    confidence_level: int | None
    setup_quality: int | None
    partial_exit: bool
    trailing_stop_used: bool
    breakeven_moved: bool
    would_trade_again: bool | None
    mistakes: str | None
    lessons_learned: str | None
    what_worked: str | None
    account_balance: float | None
    risk_percent: float | None
    position_size_percent: float | None
    max_drawdown: float
    fund_account_id: int | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TradeFilters(BaseModel):
    """Query filters shared by the trade list and the analytics endpoints."""

    model_config = {"use_enum_values": True}

    strategy: str | None = None
    direction: Direction | None = None
    is_adherent: bool | None = None
    start_date: date | None = None
    end_date: date | None = None  # inclusive of the whole day
    fund_account_id: int | None = None
