"""
API routes, mounted under the configured API prefix.
"""

from fastapi import APIRouter

from src.api.routes import auth, users

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
router.include_router(users.router, prefix="/users", tags=["Users"])
