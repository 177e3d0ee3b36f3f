"""
Shared FastAPI dependencies.
"""
from typing import AsyncGenerator, Optional

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.base import get_db
from app.db.store import DocumentStore
from app.core.config import settings
from app.core.security import verify_admin_token

bearer_scheme = HTTPBearer(auto_error=False)


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """Outbound HTTP client for payment provider calls."""
    async with httpx.AsyncClient(timeout=settings.SQUARE_TIMEOUT_SECONDS) as client:
        yield client


async def get_store(db: AsyncSession = Depends(get_db)) -> DocumentStore:
    """Document store bound to the request's database session."""
    return DocumentStore(db)


async def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """Require a bearer token with the admin role. Returns the token subject."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    subject = verify_admin_token(credentials.credentials)
    if subject is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return subject
