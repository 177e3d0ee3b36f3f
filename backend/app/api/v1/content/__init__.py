"""
Public content routers: site copy, board, sponsors and hall of fame.

Every endpoint here is a read that falls back to built-in defaults when
the store is unavailable, and says so in the ``source`` field.
"""
from fastapi import APIRouter

from app.api.v1.content.pages import router as pages_router
from app.api.v1.content.board import router as board_router
from app.api.v1.content.sponsors import router as sponsors_router
from app.api.v1.content.hall_of_fame import router as hall_of_fame_router

content_router = APIRouter()

content_router.include_router(pages_router, prefix="/content", tags=["content"])
content_router.include_router(board_router, prefix="/board", tags=["board"])
content_router.include_router(sponsors_router, prefix="/sponsors", tags=["sponsors"])
content_router.include_router(hall_of_fame_router, prefix="/hall-of-fame", tags=["hall-of-fame"])

__all__ = ["content_router"]
