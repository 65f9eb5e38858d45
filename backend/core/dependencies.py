"""
Filadex: Core auth/request dependencies.

Provides the get_current_user FastAPI dependency (resolves the caller from the
signed ``auth`` session cookie) and the log_audit utility.
"""

import logging
from typing import Optional

from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

from core.auth import BOOT_ID, SESSION_COOKIE, decode_session_token
from core.config import settings
from core.db import get_db
from core.errors import NotAuthenticatedError, SessionExpiredError
from core.models import AuditLog

log = logging.getLogger("filadex.api")


def _clear_cookie_headers() -> dict:
    """Set-Cookie header that removes the session cookie on the client."""
    resp = Response()
    resp.delete_cookie(key=SESSION_COOKIE, path="/", httponly=True, samesite=settings.cookie_samesite)
    return {"set-cookie": resp.headers["set-cookie"]}


def user_to_context(user) -> dict:
    return {"id": user.id, "username": user.username, "is_admin": bool(user.is_admin)}


async def get_current_user(request: Request, db: Session = Depends(get_db)) -> dict:
    """Resolve the current user from the session cookie.

    Missing cookie: 401. Bad signature, expired token, a token from a previous
    boot or a deleted user: 401 and the cookie is cleared.
    """
    from modules.organizations.models import User

    token = request.cookies.get(SESSION_COOKIE)
    if not token:
        raise NotAuthenticatedError()

    session = decode_session_token(token)
    if session is None or session.boot_id != BOOT_ID:
        raise SessionExpiredError(headers=_clear_cookie_headers())

    user = db.query(User).filter(User.id == session.user_id).first()
    if not user:
        raise SessionExpiredError("User no longer exists", headers=_clear_cookie_headers())
    return user_to_context(user)


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def log_audit(db: Session, action: str, entity_type: str = None, entity_id: int = None,
              details: dict = None, ip: str = None, user_id: Optional[int] = None):
    """Record an audit trail entry. Commits together with the caller's next commit."""
    db.add(AuditLog(
        user_id=user_id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        details=details,
        ip_address=ip,
    ))
