"""Organizations routes: assembles the auth, users and theme sub-routers."""

from fastapi import APIRouter

from .routes_auth import router as auth_router
from .routes_users import router as users_router
from .theme import router as theme_router

router = APIRouter()
# users_router holds the static /users/language path before any /users/{user_id}
router.include_router(auth_router)
router.include_router(users_router)
router.include_router(theme_router)
