"""
NHBEA FastAPI Application - Main entry point.

Backend for the New Hampshire Business Educators Association website:

- Content: homepage copy, board, past presidents, sponsors, hall of fame
- Membership: professional applications with Square checkout, student applications
- Conference: current conference, availability, registration
- Submissions: award nominations, newsletter signup
- Webhooks: Square payment notifications
- Admin: member maintenance, conference lifecycle, submission lists

All endpoints are served under /api/v1/.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.db.base import init_db
from app.schemas.common import HealthResponse

from app.api.v1.content import content_router
from app.api.v1.membership import membership_router
from app.api.v1.conference import conference_router
from app.api.v1.submissions import submissions_router
from app.api.v1.webhooks import webhooks_router
from app.api.v1.admin import admin_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    # Startup: create the documents table if needed
    await init_db()
    logger.info(f"{settings.APP_NAME} started ({settings.APP_ENV})")
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    description="""
NHBEA - New Hampshire Business Educators Association.

## Modules

- **Content**: Site copy, board of directors, sponsors, hall of fame
- **Membership**: Professional (paid) and student applications
- **Conference**: Annual conference details and registration
- **Submissions**: Award nominations and newsletter signup
- **Admin**: Maintenance endpoints (bearer token with admin role)
    """,
    lifespan=lifespan,
    docs_url="/api/docs" if settings.DEBUG else None,
    redoc_url="/api/redoc" if settings.DEBUG else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# HEALTH CHECK
# ============================================================================

@app.get("/api/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """Health check endpoint."""
    return HealthResponse(code=200, message="API is healthy.")


# ============================================================================
# API v1 ROUTERS
# ============================================================================

# Public content: /api/v1/content, /board, /sponsors, /hall-of-fame
app.include_router(content_router, prefix=settings.API_V1_PREFIX)

# Membership applications: /api/v1/membership/*
app.include_router(membership_router, prefix=settings.API_V1_PREFIX)

# Conference: /api/v1/conference/*
app.include_router(conference_router, prefix=settings.API_V1_PREFIX)

# Nominations and newsletter: /api/v1/nominations, /api/v1/newsletter/*
app.include_router(submissions_router, prefix=settings.API_V1_PREFIX)

# Payment provider callbacks: /api/v1/webhooks/*
app.include_router(webhooks_router, prefix=settings.API_V1_PREFIX)

# Admin: /api/v1/admin/*
app.include_router(admin_router, prefix=settings.API_V1_PREFIX)


# ============================================================================
# ERROR HANDLERS
# ============================================================================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    if settings.DEBUG:
        return JSONResponse(
            status_code=500,
            content={"detail": str(exc)}
        )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
