"""
Public form submission routers: award nominations and newsletter signup.
"""
from fastapi import APIRouter

from app.api.v1.submissions.nominations import router as nominations_router
from app.api.v1.submissions.newsletter import router as newsletter_router

submissions_router = APIRouter()

submissions_router.include_router(nominations_router, prefix="/nominations", tags=["nominations"])
submissions_router.include_router(newsletter_router, prefix="/newsletter", tags=["newsletter"])

__all__ = ["submissions_router"]
