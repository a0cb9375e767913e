"""Tests for catalog filtering, search and ranking."""

from datetime import UTC, datetime

import pytest

from airdrops_hunter.schemas.airdrop import AirdropResponse
from airdrops_hunter.schemas.blog_post import BlogPostResponse
from airdrops_hunter.services.catalog import (
    ALL,
    HIGH_VALUE,
    ValueParsing,
    featured_airdrops,
    filter_airdrops,
    filter_blog_posts,
    parse_estimated_value,
    rank_by_value,
    sort_by_recency,
)

CREATED = datetime(2024, 1, 1, tzinfo=UTC)


def airdrop(
    airdrop_id,
    title="Airdrop",
    project_name="Project",
    description="Description text",
    category="DeFi",
    status="Active",
    value="$100",
):
    return AirdropResponse(
        id=airdrop_id,
        title=title,
        project_name=project_name,
        description=description,
        requirements=None,
        category=category,
        estimated_value=value,
        status=status,
        participants=0,
        logo_url=None,
        cover_image_url=None,
        start_date=None,
        end_date=None,
        created_at=CREATED,
    )


def post(post_id, title="Post", content="Post content", category="Guide", tags=None, day=1):
    return BlogPostResponse(
        id=post_id,
        title=title,
        content=content,
        category=category,
        image_url=None,
        author_id=None,
        tags=tags,
        published_at=datetime(2023, 6, day, tzinfo=UTC),
    )


class TestParseEstimatedValue:
    """Derived ranking key for estimated values."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("$50-$200", 50200),
            ("$1000", 1000),
            ("$1,500", 1500),
            ("Unknown", 0),
            ("", 0),
        ],
    )
    def test_digits_mode(self, value, expected):
        assert parse_estimated_value(value, ValueParsing.DIGITS) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("$50-$200", 200),
            ("$1000", 1000),
            ("$200-$50", 200),
            ("TBA", 0),
        ],
    )
    def test_max_bound_mode(self, value, expected):
        assert parse_estimated_value(value, ValueParsing.MAX_BOUND) == expected

    def test_default_is_digits(self):
        assert parse_estimated_value("$50-$200") == 50200


class TestHighValueRanking:
    """Ranking by derived value."""

    def test_digits_mode_ranks_range_above_larger_single_value(self):
        ranged = airdrop(1, title="Ranged", value="$50-$200")
        single = airdrop(2, title="Single", value="$1000")

        ranked = rank_by_value([single, ranged], ValueParsing.DIGITS)
        assert [a.title for a in ranked] == ["Ranged", "Single"]

    def test_max_bound_mode_ranks_larger_single_value_first(self):
        ranged = airdrop(1, title="Ranged", value="$50-$200")
        single = airdrop(2, title="Single", value="$1000")

        ranked = rank_by_value([ranged, single], ValueParsing.MAX_BOUND)
        assert [a.title for a in ranked] == ["Single", "Ranged"]

    def test_ties_keep_insertion_order(self):
        records = [
            airdrop(1, value="$100"),
            airdrop(2, value="$500"),
            airdrop(3, value="$100"),
            airdrop(4, value="100"),
        ]
        ranked = rank_by_value(records)
        assert [a.id for a in ranked] == [2, 1, 3, 4]

    def test_does_not_mutate_input(self):
        records = [airdrop(1, value="$1"), airdrop(2, value="$2")]
        rank_by_value(records)
        assert [a.id for a in records] == [1, 2]


class TestFilterAirdrops:
    """Status, category and search filters."""

    @pytest.fixture
    def airdrops(self):
        return [
            airdrop(1, title="MoonToken Airdrop", project_name="MoonToken", status="Active"),
            airdrop(2, title="GameFi Drop", project_name="GameFi", category="Gaming", status="Upcoming"),
            airdrop(3, title="Nexus", description="Layer two governance token", status="Active"),
            airdrop(4, title="Swap", category="Exchange", status="Ending Soon"),
        ]

    def test_status_filter_exact_subset_in_order(self, airdrops):
        result = filter_airdrops(airdrops, status="Active")
        assert [a.id for a in result] == [1, 3]

    def test_all_sentinel_means_no_filter(self, airdrops):
        assert filter_airdrops(airdrops, status=ALL, category=ALL) == airdrops
        assert filter_airdrops(airdrops) == airdrops

    def test_category_filter(self, airdrops):
        assert [a.id for a in filter_airdrops(airdrops, category="Gaming")] == [2]

    def test_search_is_case_insensitive_over_any_field(self, airdrops):
        assert [a.id for a in filter_airdrops(airdrops, search="moon")] == [1]
        assert [a.id for a in filter_airdrops(airdrops, search="GAMEFI")] == [2]
        assert [a.id for a in filter_airdrops(airdrops, search="governance")] == [3]

    def test_filters_are_conjunctive(self, airdrops):
        assert filter_airdrops(airdrops, status="Upcoming", search="moon") == []
        assert [a.id for a in filter_airdrops(airdrops, status="Active", search="nexus")] == [3]
        assert filter_airdrops(airdrops, status="Active", category="Gaming") == []


class TestBlogPosts:
    """Blog post search and recency sort."""

    def test_search_covers_title_content_and_tags(self):
        posts = [
            post(1, title="Top Airdrops"),
            post(2, content="How to stay SAFE"),
            post(3, tags="security,scams"),
            post(4),
        ]
        assert [p.id for p in filter_blog_posts(posts, search="airdrops")] == [1]
        assert [p.id for p in filter_blog_posts(posts, search="safe")] == [2]
        assert [p.id for p in filter_blog_posts(posts, search="scams")] == [3]

    def test_category_filter(self):
        posts = [post(1, category="Guide"), post(2, category="Security")]
        assert [p.id for p in filter_blog_posts(posts, category="Security")] == [2]
        assert filter_blog_posts(posts, category=ALL) == posts

    def test_sort_by_recency(self):
        posts = [post(1, day=5), post(2, day=15), post(3, day=10)]
        assert [p.id for p in sort_by_recency(posts)] == [2, 3, 1]


class TestFeatured:
    """Home page selection."""

    @pytest.fixture
    def airdrops(self):
        statuses = ["Active", "Upcoming", "Ending Soon", "Active", "Upcoming", "Active", "Active"]
        return [
            airdrop(i, status=status, value=f"${i * 10}")
            for i, status in enumerate(statuses, start=1)
        ]

    def test_all_returns_first_six(self, airdrops):
        assert [a.id for a in featured_airdrops(airdrops)] == [1, 2, 3, 4, 5, 6]

    def test_high_value(self, airdrops):
        result = featured_airdrops(airdrops, view=HIGH_VALUE, limit=3)
        assert [a.id for a in result] == [7, 6, 5]

    def test_status_view(self, airdrops):
        assert [a.id for a in featured_airdrops(airdrops, view="Upcoming")] == [2, 5]
