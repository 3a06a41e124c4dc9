"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tradejournal.config import settings
from tradejournal.database import create_db_and_tables
from tradejournal.utils.logging import setup_logging
from tradejournal.api import auth, trades, strategies, fund_accounts, analytics, system


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    setup_logging()
    create_db_and_tables()
    yield


app = FastAPI(
    title="Trade Journal",
    description="Personal trading journal with performance analytics",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount routers
app.include_router(auth.router)
app.include_router(trades.router)
app.include_router(strategies.router)
app.include_router(fund_accounts.router)
app.include_router(analytics.router)
app.include_router(system.router)
