"""
Conference routers.
"""
from fastapi import APIRouter

from app.api.v1.conference.conferences import router as conferences_router
from app.api.v1.conference.registrations import router as registrations_router

conference_router = APIRouter(prefix="/conference", tags=["conference"])

conference_router.include_router(conferences_router)
conference_router.include_router(registrations_router)

__all__ = ["conference_router"]
