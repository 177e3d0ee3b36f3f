from fastapi import APIRouter

from app.api.v1.webhooks.square import router as square_router

webhooks_router = APIRouter(prefix="/webhooks", tags=["webhooks"])

webhooks_router.include_router(square_router)

__all__ = ["webhooks_router"]
