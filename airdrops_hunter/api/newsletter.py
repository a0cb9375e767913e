"""Newsletter API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from airdrops_hunter.api.dependencies import get_admin_user, get_storage
from airdrops_hunter.schemas.auth import UserInDB
from airdrops_hunter.schemas.newsletter import (
    NewsletterSubscriptionCreate,
    NewsletterSubscriptionResponse,
)
from airdrops_hunter.services.storage import DuplicateRecordError, Storage

router = APIRouter(prefix="/api/newsletter", tags=["newsletter"])


@router.post("", response_model=NewsletterSubscriptionResponse, status_code=status.HTTP_201_CREATED)
def subscribe(
    subscription_data: NewsletterSubscriptionCreate,
    storage: Annotated[Storage, Depends(get_storage)],
):
    """Subscribe an email address to the newsletter."""
    if storage.get_newsletter_subscription_by_email(subscription_data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already subscribed",
        )
    try:
        return storage.create_newsletter_subscription(subscription_data)
    except DuplicateRecordError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already subscribed",
        ) from e


@router.get("", response_model=list[NewsletterSubscriptionResponse])
def list_subscriptions(
    admin: Annotated[UserInDB, Depends(get_admin_user)],
    storage: Annotated[Storage, Depends(get_storage)],
):
    """List newsletter subscriptions (admin only)."""
    return storage.get_newsletter_subscriptions()
