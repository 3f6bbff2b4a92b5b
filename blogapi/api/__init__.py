"""HTTP API routers, all mounted under /api."""

from fastapi import APIRouter

from blogapi.api.auth import router as auth_router
from blogapi.api.blogs import router as blogs_router
from blogapi.api.upload import router as upload_router

router = APIRouter(prefix="/api")
router.include_router(auth_router)
router.include_router(blogs_router)
router.include_router(upload_router)

__all__ = ["router"]
