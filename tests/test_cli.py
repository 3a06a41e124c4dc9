"""Tests for the admin CLI."""

from unittest.mock import patch

import pytest
from sqlmodel import Session, select

from tradejournal import cli
from tradejournal.models.user import User
from tradejournal.services.auth import verify_password


@pytest.fixture
def cli_env(engine):
    with patch.object(cli, "engine", engine), \
            patch.object(cli, "create_db_and_tables"), \
            patch.object(cli, "print_qr") as print_qr:
        yield print_qr


def test_create_user(engine, cli_env, capsys):
    with patch("builtins.input", return_value="alice"), \
            patch("getpass.getpass", return_value="long-enough-pw"):
        cli.create_user()

    with Session(engine) as session:
        user = session.exec(select(User)).one()
    assert user.username == "alice"
    assert verify_password("long-enough-pw", user.hashed_password)
    assert "TOTP Secret" in capsys.readouterr().out
    cli_env.assert_called_once()


def test_create_user_rejects_mismatch(engine, cli_env):
    with patch("builtins.input", return_value="alice"), \
            patch("getpass.getpass", side_effect=["long-enough-pw", "different-pw"]):
        with pytest.raises(SystemExit):
            cli.create_user()

    with Session(engine) as session:
        assert session.exec(select(User)).first() is None


def test_unknown_command():
    with patch("sys.argv", ["tradejournal", "drop-everything"]):
        with pytest.raises(SystemExit):
            cli.main()
