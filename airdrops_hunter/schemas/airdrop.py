"""Airdrop schemas."""

from pydantic import Field, field_validator

from airdrops_hunter.schemas.base import CamelModel, UrlStr, UtcDatetime, reject_null


class AirdropCreate(CamelModel):
    """Create a new airdrop listing."""

    title: str = Field(..., min_length=3, max_length=255)
    project_name: str = Field(..., min_length=2, max_length=255)
    description: str = Field(..., min_length=10)
    requirements: str | None = None
    category: str = Field(..., min_length=1, max_length=100)
    estimated_value: str = Field(..., min_length=1, max_length=100)
    status: str = Field(..., min_length=1, max_length=50)
    participants: int = Field(0, ge=0)
    logo_url: UrlStr | None = None
    cover_image_url: UrlStr | None = None
    start_date: UtcDatetime | None = None
    end_date: UtcDatetime | None = None


class AirdropUpdate(CamelModel):
    """Update an airdrop. Only the fields sent are changed."""

    title: str | None = Field(None, min_length=3, max_length=255)
    project_name: str | None = Field(None, min_length=2, max_length=255)
    description: str | None = Field(None, min_length=10)
    requirements: str | None = None
    category: str | None = Field(None, min_length=1, max_length=100)
    estimated_value: str | None = Field(None, min_length=1, max_length=100)
    status: str | None = Field(None, min_length=1, max_length=50)
    participants: int | None = Field(None, ge=0)
    logo_url: UrlStr | None = None
    cover_image_url: UrlStr | None = None
    start_date: UtcDatetime | None = None
    end_date: UtcDatetime | None = None

    @field_validator(
        "title",
        "project_name",
        "description",
        "category",
        "estimated_value",
        "status",
        "participants",
    )
    @classmethod
    def required_fields_not_null(cls, value):
        return reject_null(value)


class AirdropResponse(CamelModel):
    """Airdrop response."""

    id: int
    title: str
    project_name: str
    description: str
    requirements: str | None
    category: str
    estimated_value: str
    status: str
    participants: int
    logo_url: str | None
    cover_image_url: str | None
    start_date: UtcDatetime | None
    end_date: UtcDatetime | None
    created_at: UtcDatetime
