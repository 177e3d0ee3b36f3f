"""
Square webhook receiver.

Square signs each notification with the subscription's signature key; the
raw body must be verified before it is parsed.
"""
import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from app.core.config import settings
from app.core.deps import get_store
from app.db.store import DocumentStore
from app.schemas.common import MessageResponse
from app.services.payments import handle_payment_event, validate_square_webhook_signature

logger = logging.getLogger(__name__)

router = APIRouter()

SIGNATURE_HEADER = "x-square-hmacsha256-signature"


@router.post("/square", response_model=MessageResponse)
async def receive_square_webhook(
    request: Request,
    signature: Optional[str] = Header(default=None, alias=SIGNATURE_HEADER),
    store: DocumentStore = Depends(get_store),
):
    body = await request.body()

    if not signature or not validate_square_webhook_signature(
        body, signature, settings.SQUARE_WEBHOOK_SIGNATURE_KEY
    ):
        logger.warning("Rejected Square webhook with invalid signature")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid webhook signature",
        )

    try:
        event = json.loads(body)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid JSON")

    applied = await handle_payment_event(store, event)
    return MessageResponse(message="processed" if applied else "ignored")
