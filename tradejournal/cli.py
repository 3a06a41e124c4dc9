"""CLI tool for admin operations.

Usage:
    python -m tradejournal.cli create-user
"""

import sys
import getpass

from sqlmodel import Session, select

from tradejournal.database import engine, create_db_and_tables
from tradejournal.models.user import User
from tradejournal.services.auth import (
    MIN_PASSWORD_LENGTH,
    generate_totp_secret,
    get_totp_uri,
    hash_password,
)


def create_user():
    """Create a journal user with TOTP setup."""
    create_db_and_tables()

    username = input("Username: ").strip()
    if not username:
        print("Username cannot be empty.")
        sys.exit(1)

    with Session(engine) as session:
        existing = session.exec(select(User).where(User.username == username)).first()
        if existing:
            print(f"User '{username}' already exists.")
            sys.exit(1)

    password = getpass.getpass("Password: ")
    if len(password) < MIN_PASSWORD_LENGTH:
        print(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")
        sys.exit(1)
    if password != getpass.getpass("Confirm password: "):
        print("Passwords do not match.")
        sys.exit(1)

    totp_secret = generate_totp_secret()
    totp_uri = get_totp_uri(totp_secret, username)

    with Session(engine) as session:
        session.add(User(
            username=username,
            hashed_password=hash_password(password),
            totp_secret=totp_secret,
        ))
        session.commit()

    print(f"\nUser '{username}' created.")
    print(f"\nTOTP Secret: {totp_secret}")
    print(f"TOTP URI: {totp_uri}")
    print_qr(totp_uri)


def print_qr(uri: str):
    """Render the provisioning URI as a terminal QR code when qrcode is installed."""
    try:
        import qrcode
    except ImportError:
        print("(Install the 'qr' extra to display a QR code in the terminal)")
        return
    print("\nScan with your authenticator app:")
    qr = qrcode.QRCode(box_size=1, border=1)
    qr.add_data(uri)
    qr.make(fit=True)
    qr.print_ascii(invert=True)


COMMANDS = {"create-user": create_user}


def main():
    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        if len(sys.argv) >= 2:
            print(f"Unknown command: {sys.argv[1]}")
        print("Usage: python -m tradejournal.cli <command>")
        print(f"Commands: {', '.join(COMMANDS)}")
        sys.exit(1)
    COMMANDS[sys.argv[1]]()


if __name__ == "__main__":
    main()
