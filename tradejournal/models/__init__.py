"""Database models."""

from tradejournal.models.user import User
from tradejournal.models.strategy import Strategy
from tradejournal.models.fund_account import FundAccount
from tradejournal.models.trade import Trade

__all__ = [
    "User",
    "Strategy",
    "FundAccount",
    "Trade",
]
