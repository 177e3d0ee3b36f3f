"""
Newsletter subscriptions.

Subscribers are keyed by their normalized email address, so a second
signup for the same address finds the existing document instead of
creating a duplicate. Results are returned as values for the signup form.
"""
import logging
from datetime import datetime, timezone

from app.db.store import DocumentStore
from app.schemas.submissions import NewsletterResult, NewsletterSubscriber, SubscriberStatus
from app.services.documents import load_collection
from app.services.validation import validate_newsletter_email

logger = logging.getLogger(__name__)

NEWSLETTER_COLLECTION = "newsletterSubscribers"

GENERIC_FAILURE = "Something went wrong. Please try again later."


async def add_newsletter_subscriber(store: DocumentStore, email: str) -> NewsletterResult:
    result = validate_newsletter_email(email)
    if not result.is_valid:
        return NewsletterResult(
            success=False,
            message="Please enter a valid email address.",
            error="Invalid email format",
        )
    normalized = result.data["email"]

    try:
        existing = await store.get(NEWSLETTER_COLLECTION, normalized)
        if existing is not None:
            if existing.data.get("status") == SubscriberStatus.ACTIVE.value:
                return NewsletterResult(
                    success=False,
                    message="You are already subscribed to our newsletter.",
                    error="Email already subscribed",
                )
            await store.update(NEWSLETTER_COLLECTION, normalized, {
                "status": SubscriberStatus.ACTIVE.value,
                "timestamp": datetime.now(timezone.utc),
            })
            logger.info(f"Reactivated newsletter subscription for {normalized}")
            return NewsletterResult(
                success=True,
                message="Welcome back! Your newsletter subscription has been reactivated.",
            )

        subscriber = NewsletterSubscriber(
            email=normalized,
            timestamp=datetime.now(timezone.utc),
            status=SubscriberStatus.ACTIVE,
        )
        await store.set(NEWSLETTER_COLLECTION, normalized, subscriber.to_document())
    except Exception as exc:
        logger.error(f"Error adding newsletter subscriber: {exc}")
        return NewsletterResult(success=False, message=GENERIC_FAILURE, error=str(exc))

    logger.info(f"New newsletter subscriber {normalized}")
    return NewsletterResult(
        success=True,
        message="Thank you for subscribing! You will receive our latest updates.",
    )


async def unsubscribe_newsletter(store: DocumentStore, email: str) -> NewsletterResult:
    normalized = email.strip().lower()
    try:
        existing = await store.get(NEWSLETTER_COLLECTION, normalized)
        if existing is None:
            return NewsletterResult(
                success=False,
                message="Email address not found in our newsletter list.",
                error="Email not found",
            )
        await store.update(NEWSLETTER_COLLECTION, normalized, {
            "status": SubscriberStatus.UNSUBSCRIBED.value,
            "timestamp": datetime.now(timezone.utc),
        })
    except Exception as exc:
        logger.error(f"Error unsubscribing from newsletter: {exc}")
        return NewsletterResult(success=False, message=GENERIC_FAILURE, error=str(exc))

    logger.info(f"Unsubscribed {normalized} from newsletter")
    return NewsletterResult(
        success=True,
        message="You have been successfully unsubscribed from our newsletter.",
    )


async def get_newsletter_subscribers(store: DocumentStore) -> list[NewsletterSubscriber]:
    return await load_collection(
        store, NEWSLETTER_COLLECTION, NewsletterSubscriber, "newsletter subscribers",
        order_by="timestamp", descending=True,
    )
