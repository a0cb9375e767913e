"""Blog post schemas."""

from pydantic import Field, field_validator

from airdrops_hunter.schemas.base import CamelModel, UrlStr, UtcDatetime, reject_null


class BlogPostCreate(CamelModel):
    """Create a new blog post."""

    title: str = Field(..., min_length=3, max_length=255)
    content: str = Field(..., min_length=10)
    category: str = Field(..., min_length=1, max_length=100)
    image_url: UrlStr | None = None
    author_id: int | None = Field(None, gt=0)
    tags: str | None = None  # comma-separated
    published_at: UtcDatetime | None = None


class BlogPostUpdate(CamelModel):
    """Update a blog post. publishedAt is fixed at creation."""

    title: str | None = Field(None, min_length=3, max_length=255)
    content: str | None = Field(None, min_length=10)
    category: str | None = Field(None, min_length=1, max_length=100)
    image_url: UrlStr | None = None
    author_id: int | None = Field(None, gt=0)
    tags: str | None = None

    @field_validator("title", "content", "category")
    @classmethod
    def required_fields_not_null(cls, value):
        return reject_null(value)


class BlogPostResponse(CamelModel):
    """Blog post response."""

    id: int
    title: str
    content: str
    category: str
    image_url: str | None
    author_id: int | None
    tags: str | None
    published_at: UtcDatetime
