"""Router package exposing all API routers."""

from fastapi import APIRouter

from .hairstyles.router import router as hairstyles_router
from .saved.router import router as saved_router

router = APIRouter()
router.include_router(hairstyles_router)
router.include_router(saved_router)

__all__ = ["router", "hairstyles_router", "saved_router"]
