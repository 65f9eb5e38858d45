"""
Authentication utilities for Filadex.
Handles password hashing and signed session tokens.

A session token is an HS256 JWT carrying the user id (``sub``), the process
boot id (``boot``), an expiry and a unique ``jti``. BOOT_ID is generated once
per process, so every restart invalidates all outstanding sessions.
"""
import logging
import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt.exceptions import PyJWTError
from passlib.context import CryptContext
from pydantic import BaseModel

from core.config import settings

log = logging.getLogger("filadex.auth")

# Configuration
SECRET_KEY = settings.jwt_secret
if not SECRET_KEY:
    SECRET_KEY = secrets.token_urlsafe(48)
    log.warning("JWT_SECRET is not set; using a random per-process secret")
ALGORITHM = "HS256"
SESSION_COOKIE = "auth"

BOOT_ID = uuid.uuid4().hex

# Password hashing
pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds
)


class SessionData(BaseModel):
    user_id: int
    boot_id: str
    jti: str


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    return pwd_context.hash(password)


def create_session_token(user_id: int, expires_delta: Optional[timedelta] = None,
                         boot_id: Optional[str] = None) -> str:
    """Create a signed session token bound to the current boot."""
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.session_max_age_hours)
    expire = datetime.now(timezone.utc) + expires_delta
    payload = {
        "sub": str(user_id),
        "boot": boot_id or BOOT_ID,
        "exp": expire,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def decode_session_token(token: str) -> Optional[SessionData]:
    """Decode and validate a session token. Returns None when invalid or expired."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        user_id = int(payload["sub"])
        return SessionData(user_id=user_id, boot_id=payload.get("boot", ""), jti=payload.get("jti", ""))
    except (PyJWTError, KeyError, ValueError):
        return None
