"""Shared schema building blocks."""

from datetime import UTC, datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, HttpUrl, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

_http_url = TypeAdapter(HttpUrl)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def check_url(value: str) -> str:
    """Require an absolute http(s) URL, keeping the submitted text as-is."""
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError("must be a valid absolute URL") from None
    return value


def reject_null(value):
    """Refuse an explicit null for a column that cannot be empty."""
    if value is None:
        raise ValueError("may not be null")
    return value


UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]
UrlStr = Annotated[str, AfterValidator(check_url)]


class CamelModel(BaseModel):
    """Base schema: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
