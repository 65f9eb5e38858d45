"""Organizations auth routes: login, logout, me, change-password."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from core.auth import (
    SESSION_COOKIE, create_session_token, hash_password, pwd_context, verify_password,
)
from core.config import settings
from core.db import get_db
from core.dependencies import client_ip, get_current_user, log_audit
from core.errors import IncorrectPasswordError, InvalidCredentialsError, NotFoundError
from core.rate_limit import limiter
from modules.organizations.models import User
from modules.organizations.schemas import (
    ChangePasswordRequest, LoginRequest, LoginResponse, UserResponse,
)
from modules.organizations.services import find_user_by_username

log = logging.getLogger("filadex.api")
router = APIRouter()


def _is_https(request: Request) -> bool:
    forwarded = request.headers.get("x-forwarded-proto", "")
    return request.url.scheme == "https" or forwarded.split(",")[0].strip() == "https"


# ============== Login ==============

@router.post("/auth/login", tags=["Auth"])
@limiter.limit("10/minute")
async def login(request: Request, body: LoginRequest, db: Session = Depends(get_db)):
    """Verify credentials and issue the session cookie."""
    ip = client_ip(request)
    user = find_user_by_username(db, body.username.strip())
    if not user:
        # Same cost and message whether or not the username exists
        pwd_context.dummy_verify()
        log.info(f"Failed login from {ip}")
        raise InvalidCredentialsError()
    if not verify_password(body.password, user.password_hash):
        log.info(f"Failed login from {ip}")
        raise InvalidCredentialsError()

    user.last_login = datetime.now(timezone.utc)
    log_audit(db, "auth.login", "user", user.id, ip=ip, user_id=user.id)
    db.commit()
    db.refresh(user)

    token = create_session_token(user.id)
    payload = LoginResponse(
        user=UserResponse.model_validate(user),
        force_change_password=user.force_change_password,
    )
    resp = JSONResponse(payload.to_json())
    resp.set_cookie(
        key=SESSION_COOKIE, value=token, httponly=True,
        secure=_is_https(request), samesite=settings.cookie_samesite,
        path="/", max_age=settings.session_max_age_hours * 3600,
    )
    return resp


# ============== Logout ==============

@router.post("/auth/logout", tags=["Auth"])
async def logout(response: Response):
    """Clear the session cookie."""
    response.delete_cookie(key=SESSION_COOKIE, path="/", httponly=True, samesite=settings.cookie_samesite)
    return {"message": "Logged out successfully"}


# ============== Current user ==============

@router.get("/auth/me", tags=["Auth"], response_model=UserResponse)
def me(current_user: dict = Depends(get_current_user), db: Session = Depends(get_db)):
    user = db.query(User).filter(User.id == current_user["id"]).first()
    if not user:
        raise NotFoundError("User not found")
    return user


@router.post("/auth/change-password", tags=["Auth"])
def change_password(
    body: ChangePasswordRequest,
    request: Request,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Re-verify the current password, then store the new one and clear the force flag."""
    user = db.query(User).filter(User.id == current_user["id"]).first()
    if not user:
        raise NotFoundError("User not found")
    if not verify_password(body.current_password, user.password_hash):
        raise IncorrectPasswordError()

    user.password_hash = hash_password(body.new_password)
    user.force_change_password = False
    log_audit(db, "auth.change_password", "user", user.id, ip=client_ip(request), user_id=user.id)
    db.commit()
    return {"message": "Password updated successfully"}
