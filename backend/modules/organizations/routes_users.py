"""Organizations users routes: admin user management and language preference."""

import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from core.auth import hash_password
from core.db import get_db
from core.dependencies import client_ip, get_current_user, log_audit
from core.errors import DuplicateError, ForbiddenError, NotFoundError, ValidationError
from core.rbac import require_admin
from modules.organizations.models import User
from modules.organizations.schemas import LanguageUpdate, UserCreate, UserResponse, UserUpdate
from modules.organizations.services import admin_count, find_user_by_username

log = logging.getLogger("filadex.api")
router = APIRouter()


# ============== Users CRUD ==============

@router.get("/users", tags=["Users"], response_model=list[UserResponse])
def list_users(current_user: dict = Depends(require_admin), db: Session = Depends(get_db)):
    return db.query(User).order_by(User.id).all()


@router.post("/users", tags=["Users"], response_model=UserResponse, status_code=201)
def create_user(
    body: UserCreate,
    request: Request,
    current_user: dict = Depends(require_admin),
    db: Session = Depends(get_db),
):
    if find_user_by_username(db, body.username):
        raise DuplicateError("Username already exists")

    user = User(
        username=body.username,
        password_hash=hash_password(body.password),
        is_admin=body.is_admin,
        force_change_password=body.force_change_password,
    )
    db.add(user)
    db.flush()
    log_audit(db, "user.create", "user", user.id, details={"username": user.username},
              ip=client_ip(request), user_id=current_user["id"])
    db.commit()
    db.refresh(user)
    return user


@router.put("/users/{user_id}", tags=["Users"], response_model=UserResponse)
def update_user(
    user_id: int,
    body: UserUpdate,
    request: Request,
    current_user: dict = Depends(require_admin),
    db: Session = Depends(get_db),
):
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")

    if body.username is not None and body.username.lower() != user.username.lower():
        if find_user_by_username(db, body.username):
            raise DuplicateError("Username already exists")
    if body.is_admin is False and user.is_admin and admin_count(db) <= 1:
        raise ValidationError("Cannot remove admin rights from the last admin user")

    if body.username is not None:
        user.username = body.username
    if body.password:
        user.password_hash = hash_password(body.password)
    if body.is_admin is not None:
        user.is_admin = body.is_admin
    if body.force_change_password is not None:
        user.force_change_password = body.force_change_password

    log_audit(db, "user.update", "user", user.id, details={"username": user.username},
              ip=client_ip(request), user_id=current_user["id"])
    db.commit()
    db.refresh(user)
    return user


@router.delete("/users/{user_id}", tags=["Users"], status_code=204)
def delete_user(
    user_id: int,
    request: Request,
    current_user: dict = Depends(require_admin),
    db: Session = Depends(get_db),
):
    if user_id == current_user["id"]:
        raise ForbiddenError("Cannot delete yourself")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    if user.is_admin and admin_count(db) <= 1:
        raise ValidationError("Cannot delete the last admin user")

    log_audit(db, "user.delete", "user", user.id, details={"username": user.username},
              ip=client_ip(request), user_id=current_user["id"])
    db.delete(user)
    db.commit()
    return Response(status_code=204)


# ============== Preferences ==============

@router.post("/users/language", tags=["Users"])
def update_language(
    body: LanguageUpdate,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Store the caller's UI language (en or de)."""
    user = db.query(User).filter(User.id == current_user["id"]).first()
    if not user:
        raise NotFoundError("User not found")
    user.language = body.language
    db.commit()
    return {"message": "Language preference updated successfully", "language": body.language.value}
