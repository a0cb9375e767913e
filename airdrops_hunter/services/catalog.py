"""Filtering, search and ranking over catalog collections.

These functions never mutate their input; they return new lists.
"""

import re
from collections.abc import Iterable
from enum import StrEnum

from airdrops_hunter.schemas.airdrop import AirdropResponse
from airdrops_hunter.schemas.blog_post import BlogPostResponse

# Sentinel meaning "no filter on this dimension"
ALL = "All"
HIGH_VALUE = "High Value"
FEATURED_LIMIT = 6

_NON_DIGITS = re.compile(r"[^0-9]")
_NUMBERS = re.compile(r"\d+")


class ValueParsing(StrEnum):
    """How an estimated value string becomes a sort key."""

    # Strip every non-digit: "$50-$200" -> 50200
    DIGITS = "digits"
    # Largest number in the string: "$50-$200" -> 200
    MAX_BOUND = "max_bound"


def parse_estimated_value(value: str, parsing: ValueParsing = ValueParsing.DIGITS) -> int:
    """Derive the integer ranking key for an estimated value. No digits gives 0."""
    if parsing == ValueParsing.MAX_BOUND:
        numbers = [int(n) for n in _NUMBERS.findall(value or "")]
        return max(numbers, default=0)
    digits = _NON_DIGITS.sub("", value or "")
    return int(digits) if digits else 0


def _is_unfiltered(value: str | None) -> bool:
    return value is None or value == "" or value == ALL


def _contains(query: str, *fields: str | None) -> bool:
    return any(field is not None and query in field.lower() for field in fields)


def search_airdrops(airdrops: Iterable[AirdropResponse], query: str) -> list[AirdropResponse]:
    """Case-insensitive substring match on title, project name or description."""
    needle = query.lower()
    return [
        airdrop
        for airdrop in airdrops
        if _contains(needle, airdrop.title, airdrop.project_name, airdrop.description)
    ]


def search_blog_posts(posts: Iterable[BlogPostResponse], query: str) -> list[BlogPostResponse]:
    """Case-insensitive substring match on title, content or tags."""
    needle = query.lower()
    return [post for post in posts if _contains(needle, post.title, post.content, post.tags)]


def filter_airdrops(
    airdrops: Iterable[AirdropResponse],
    status: str | None = None,
    category: str | None = None,
    search: str | None = None,
) -> list[AirdropResponse]:
    """Apply status, category and search filters together, keeping order."""
    result = list(airdrops)
    if search:
        result = search_airdrops(result, search)
    if not _is_unfiltered(category):
        result = [airdrop for airdrop in result if airdrop.category == category]
    if not _is_unfiltered(status):
        result = [airdrop for airdrop in result if airdrop.status == status]
    return result


def filter_blog_posts(
    posts: Iterable[BlogPostResponse],
    category: str | None = None,
    search: str | None = None,
) -> list[BlogPostResponse]:
    """Apply category and search filters together, keeping order."""
    result = list(posts)
    if search:
        result = search_blog_posts(result, search)
    if not _is_unfiltered(category):
        result = [post for post in result if post.category == category]
    return result


def rank_by_value(
    airdrops: Iterable[AirdropResponse],
    parsing: ValueParsing = ValueParsing.DIGITS,
) -> list[AirdropResponse]:
    """Sort by derived value, highest first. Equal keys keep their order."""
    return sorted(
        airdrops,
        key=lambda airdrop: parse_estimated_value(airdrop.estimated_value, parsing),
        reverse=True,
    )


def sort_by_recency(posts: Iterable[BlogPostResponse]) -> list[BlogPostResponse]:
    """Newest published first."""
    return sorted(posts, key=lambda post: post.published_at, reverse=True)


def featured_airdrops(
    airdrops: Iterable[AirdropResponse],
    view: str = ALL,
    limit: int = FEATURED_LIMIT,
    parsing: ValueParsing = ValueParsing.DIGITS,
) -> list[AirdropResponse]:
    """Home page selection: everything, the highest value, or one status."""
    if view == HIGH_VALUE:
        selected = rank_by_value(airdrops, parsing)
    else:
        selected = filter_airdrops(airdrops, status=view)
    return selected[:limit]
