"""Pydantic schemas for FundAccount API."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator


class FundAccountCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    initial_balance: float = Field(default=0.0, ge=0)
    balance: float | None = None  # defaults to initial_balance

    @field_validator("name")
    @classmethod
    def _trim_name(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("must not be empty")
        return text

    @model_validator(mode="after")
    def _default_balance(self):
        if self.balance is None:
            self.balance = self.initial_balance
        return self


class FundAccountUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    initial_balance: float | None = Field(default=None, ge=0)

    @field_validator("name")
    @classmethod
    def _trim_optional_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not text:
            raise ValueError("must not be empty")
        return text


class FundAccountRead(BaseModel):
    id: int
    name: str
    initial_balance: float
    balance: float
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AssignTradesRequest(BaseModel):
    trade_ids: list[int] = Field(min_length=1)


class AssignTradesResult(BaseModel):
    total: int
    assigned: int
    unchanged: int
    missing: list[int] = Field(default_factory=list)
    balance_change: float
    balance: float
