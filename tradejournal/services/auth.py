"""Journal owner authentication: bcrypt passwords, JWT bearer tokens, TOTP second factor."""

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt
import pyotp
from sqlmodel import Session, select

from tradejournal.config import settings
from tradejournal.models.user import User

logger = logging.getLogger(__name__)

TOTP_ISSUER = "Trade Journal"
MIN_PASSWORD_LENGTH = 8


def hash_password(password: str) -> str:
    # bcrypt only looks at the first 72 bytes
    pw = password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    pw = plain.encode("utf-8")[:72]
    return bcrypt.checkpw(pw, hashed.encode("utf-8"))


def find_active_user(session: Session, username: str) -> User | None:
    user = session.exec(select(User).where(User.username == username)).first()
    if user is None or not user.is_active:
        return None
    return user


def authenticate(session: Session, username: str, password: str) -> User | None:
    """Return the active user whose password matches, else None."""
    user = find_active_user(session, username)
    if user is None or not verify_password(password, user.hashed_password):
        logger.warning(f"Failed password login for '{username}'")
        return None
    return user


def create_access_token(username: str) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_expire_minutes)
    payload = {"sub": username, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str | None:
    """Username carried by a valid, unexpired token; None otherwise."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    return payload.get("sub")


def verify_totp(secret: str, code: str) -> bool:
    # Accept the neighbouring 30s steps for clock drift
    return pyotp.TOTP(secret).verify(code, valid_window=1)


def generate_totp_secret() -> str:
    return pyotp.random_base32()


def get_totp_uri(secret: str, username: str) -> str:
    return pyotp.TOTP(secret).provisioning_uri(name=username, issuer_name=TOTP_ISSUER)
