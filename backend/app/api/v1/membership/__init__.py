"""
Membership application routers.
"""
from fastapi import APIRouter

from app.api.v1.membership.professional import router as professional_router
from app.api.v1.membership.student import router as student_router

membership_router = APIRouter(tags=["membership"])

membership_router.include_router(professional_router, prefix="/membership")
membership_router.include_router(student_router, prefix="/membership")

__all__ = ["membership_router"]
