"""Shared fixtures: an in-memory database per test and a journal owner."""

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

import tradejournal.models  # noqa: F401  (registers table metadata)
from tradejournal.models.user import User


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


def make_user(session: Session, username: str = "trader") -> User:
    user = User(username=username, hashed_password="unused", totp_secret="JBSWY3DPEHPK3PXP")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def user(session):
    return make_user(session)
