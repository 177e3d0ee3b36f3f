"""
Square hosted checkout for professional memberships.

A payment link is created through Square's Online Checkout API; the member
pays on Square's page and Square calls our webhook when the payment
completes. Failures are returned as ``PaymentLinkResult`` values so the
membership form can show them.
"""
import base64
import hashlib
import hmac
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Optional, Union

import httpx

from app.core.config import settings
from app.db.store import DocumentStore
from app.services.conference import mark_registrant_paid
from app.services.members import activate_member_payment

logger = logging.getLogger(__name__)

SANDBOX_BASE_URL = "https://connect.squareupsandbox.com"
PRODUCTION_BASE_URL = "https://connect.squareup.com"
PAYMENT_LINKS_PATH = "/v2/online-checkout/payment-links"

MEMBERSHIP_ITEM_NAME = "NHBEA Professional Membership"

CONFIGURATION_ERROR = "Payment system configuration error"
GENERIC_ERROR = "Payment system error"


@dataclass
class PaymentLinkResult:
    success: bool
    payment_url: Optional[str] = None
    payment_link_id: Optional[str] = None
    error: Optional[str] = None


def square_base_url() -> str:
    return PRODUCTION_BASE_URL if settings.is_production else SANDBOX_BASE_URL


def build_payment_link_request(
    data: dict[str, Any],
    success_url: str,
    failure_url: str,
    reference_id: Optional[str] = None,
) -> dict[str, Any]:
    """Request body for ``POST /v2/online-checkout/payment-links``."""
    full_name = f"{data['firstName']} {data['lastName']}"
    order: dict[str, Any] = {
        "location_id": settings.SQUARE_LOCATION_ID,
        "line_items": [
            {
                "name": MEMBERSHIP_ITEM_NAME,
                "quantity": "1",
                "base_price_money": {
                    "amount": settings.MEMBERSHIP_FEE_CENTS,
                    "currency": "USD",
                },
            }
        ],
        "metadata": {
            "membership_type": data.get("membershipType", "new"),
            "member_email": data["email"],
            "failure_url": failure_url,
        },
    }
    if reference_id:
        order["reference_id"] = reference_id

    return {
        "idempotency_key": str(uuid.uuid4()),
        "order_request": {"order": order},
        "checkout_options": {
            "redirect_url": success_url,
            "ask_for_shipping_address": False,
            "merchant_support_email": settings.SUPPORT_EMAIL,
        },
        "pre_populated_data": {
            "buyer_email": data["email"],
            "buyer_phone_number": data.get("phone"),
        },
        "invoice_recipient": {
            "contact_information": {
                "email_address": data["email"],
                "phone_number": data.get("phone"),
            }
        },
        "payment_note": f"{MEMBERSHIP_ITEM_NAME} - {full_name}",
    }


async def create_professional_membership_payment(
    data: dict[str, Any],
    success_url: str,
    failure_url: str,
    reference_id: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> PaymentLinkResult:
    """
    Create a Square payment link for a validated membership application.

    No request is made when the Square credentials are not configured.
    ``client`` lets callers share a connection pool or inject a transport.
    """
    if not (
        settings.SQUARE_APPLICATION_ID
        and settings.SQUARE_ACCESS_TOKEN
        and settings.SQUARE_LOCATION_ID
    ):
        logger.error("Square credentials are not configured")
        return PaymentLinkResult(success=False, error=CONFIGURATION_ERROR)

    url = f"{square_base_url()}{PAYMENT_LINKS_PATH}"
    headers = {
        "Authorization": f"Bearer {settings.SQUARE_ACCESS_TOKEN}",
        "Square-Version": settings.SQUARE_API_VERSION,
        "Content-Type": "application/json",
    }
    body = build_payment_link_request(data, success_url, failure_url, reference_id)

    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=settings.SQUARE_TIMEOUT_SECONDS)
    try:
        response = await client.post(url, json=body, headers=headers)
        payload = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.error(f"Square payment link request failed: {exc}")
        return PaymentLinkResult(success=False, error=GENERIC_ERROR)
    finally:
        if owns_client:
            await client.aclose()

    if not response.is_success:
        errors = payload.get("errors") or [{}]
        detail = errors[0].get("detail") or GENERIC_ERROR
        logger.error(f"Square rejected payment link ({response.status_code}): {detail}")
        return PaymentLinkResult(success=False, error=detail)

    link = payload.get("payment_link") or {}
    logger.info(f"Created Square payment link {link.get('id')}")
    return PaymentLinkResult(
        success=True,
        payment_url=link.get("url"),
        payment_link_id=link.get("id"),
    )


def validate_square_webhook_signature(body: Union[bytes, str], signature: str, webhook_key: str) -> bool:
    """
    Check a webhook's ``x-square-hmacsha256-signature`` header.

    The signature is base64(HMAC-SHA256(key, raw body)). Anything unexpected
    (bad types, a missing key) counts as an invalid signature.
    """
    try:
        if isinstance(body, str):
            body = body.encode("utf-8")
        digest = hmac.new(webhook_key.encode("utf-8"), body, hashlib.sha256).digest()
        expected = base64.b64encode(digest).decode("ascii")
        return hmac.compare_digest(expected, signature)
    except Exception as exc:
        logger.warning(f"Webhook signature check failed: {exc}")
        return False


async def handle_payment_event(store: DocumentStore, event: dict[str, Any]) -> bool:
    """
    Apply a verified ``payment.updated`` event.

    A completed payment whose order reference names a registrant marks that
    registrant paid; otherwise a member with that id is activated. Returns
    whether anything was updated.
    """
    if event.get("type") != "payment.updated":
        logger.debug(f"Ignoring webhook event {event.get('type')}")
        return False

    payment = ((event.get("data") or {}).get("object") or {}).get("payment") or {}
    if payment.get("status") != "COMPLETED":
        return False

    reference_id = payment.get("reference_id")
    if not reference_id:
        logger.warning(f"Completed payment {payment.get('id')} has no reference id")
        return False

    if await mark_registrant_paid(store, reference_id):
        return True

    amount = payment.get("amount_money") or {}
    return await activate_member_payment(store, reference_id, {
        "paymentId": payment.get("id"),
        "amount": amount.get("amount"),
        "currency": amount.get("currency"),
        "paidAt": payment.get("updated_at"),
        "provider": "square",
    })
