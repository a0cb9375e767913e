"""Newsletter schemas."""

from pydantic import EmailStr, Field

from airdrops_hunter.schemas.base import CamelModel, UtcDatetime


class NewsletterSubscriptionCreate(CamelModel):
    """Subscribe an email address to the newsletter."""

    email: EmailStr = Field(..., max_length=255)
    interests: str | None = Field(None, max_length=500)


class NewsletterSubscriptionResponse(CamelModel):
    """Newsletter subscription response."""

    id: int
    email: str
    interests: str | None
    created_at: UtcDatetime
