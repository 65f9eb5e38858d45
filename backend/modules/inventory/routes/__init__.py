"""Inventory routes package: assembles all sub-routers."""

from fastapi import APIRouter
from .filament_ops import router as filament_ops_router
from .filaments import router as filaments_router

router = APIRouter()
# filament_ops first: static paths (/filaments/batch) must register
# before parameterized /filaments/{filament_id} in filaments_router
router.include_router(filament_ops_router)
router.include_router(filaments_router)
