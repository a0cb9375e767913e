"""Contact form schemas."""

from pydantic import EmailStr, Field

from airdrops_hunter.schemas.base import CamelModel, UtcDatetime


class ContactMessageCreate(CamelModel):
    """Message submitted through the contact form."""

    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    subject: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=10)


class ContactMessageResponse(CamelModel):
    """Contact message response."""

    id: int
    name: str
    email: str
    subject: str
    message: str
    created_at: UtcDatetime
