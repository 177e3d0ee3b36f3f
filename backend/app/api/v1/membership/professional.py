"""
Professional membership applications.

A valid application is stored as a pending member and the applicant is sent
to a Square hosted checkout. The payment webhook activates the member.
"""
import json
import logging

import httpx
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.deps import get_http_client, get_store
from app.core.exceptions import WriteError
from app.db.store import DocumentStore
from app.schemas.members import MembershipPaymentResponse
from app.services.members import create_member_from_application
from app.services.payments import create_professional_membership_payment
from app.services.validation import validate_professional_membership_form

logger = logging.getLogger(__name__)

router = APIRouter()


def _respond(status_code: int, body: MembershipPaymentResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


@router.post("/professional", response_model=MembershipPaymentResponse)
async def apply_professional_membership(
    request: Request,
    store: DocumentStore = Depends(get_store),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """Validate an application and return the checkout URL for the dues payment."""
    try:
        raw = await request.json()
    except json.JSONDecodeError:
        return _respond(status.HTTP_400_BAD_REQUEST, MembershipPaymentResponse(
            success=False,
            message="Invalid request body",
            error="Request body must be JSON",
        ))

    result = validate_professional_membership_form(raw)
    if not result.is_valid:
        return _respond(status.HTTP_400_BAD_REQUEST, MembershipPaymentResponse(
            success=False,
            message="Form validation failed",
            errors=result.errors,
        ))

    try:
        member_id = await create_member_from_application(store, result.data)
    except WriteError as exc:
        return _respond(status.HTTP_503_SERVICE_UNAVAILABLE, MembershipPaymentResponse(
            success=False,
            message="Unable to process your application at this time. Please try again later.",
            error=exc.message,
        ))

    success_url = f"{settings.SITE_URL}/membership/success?member={member_id}"
    failure_url = f"{settings.SITE_URL}/membership/professional?payment=failed"
    payment = await create_professional_membership_payment(
        result.data, success_url, failure_url, reference_id=member_id, client=client
    )

    if not payment.success:
        logger.warning(f"Payment link for member {member_id} failed: {payment.error}")
        return _respond(status.HTTP_502_BAD_GATEWAY, MembershipPaymentResponse(
            success=False,
            message="Unable to start payment. Please try again.",
            member_id=member_id,
            failure_url=failure_url,
            error=payment.error,
        ))

    return _respond(status.HTTP_200_OK, MembershipPaymentResponse(
        success=True,
        message="Application received. Continue to payment to complete your membership.",
        member_id=member_id,
        payment_url=payment.payment_url,
    ))
