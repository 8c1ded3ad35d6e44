# api/v1/router.py
from fastapi import APIRouter

from . import admin, auth, onboarding, plans, users

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(onboarding.router, prefix="/onboarding", tags=["Onboarding"])
api_router.include_router(plans.router, prefix="/plans", tags=["Plans"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
