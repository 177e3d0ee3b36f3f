"""
Admin API routers.

Provides endpoints for:
- Member records and legacy-shape maintenance
- Conference lifecycle and registrant lists
- Newsletter subscribers and award nominations
"""
from fastapi import APIRouter, Depends

from app.core.deps import require_admin
from app.api.v1.admin.members import router as members_router
from app.api.v1.admin.conference import router as conference_router
from app.api.v1.admin.submissions import router as submissions_router

# Combined admin router
admin_router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])

admin_router.include_router(members_router, tags=["admin-members"])
admin_router.include_router(conference_router, prefix="/conference", tags=["admin-conference"])
admin_router.include_router(submissions_router, tags=["admin-submissions"])

__all__ = ["admin_router"]
