"""Entity store tests, run against both backends."""

import threading
from datetime import UTC, datetime

import pytest

from airdrops_hunter.schemas.airdrop import AirdropCreate, AirdropUpdate
from airdrops_hunter.schemas.blog_post import BlogPostCreate, BlogPostUpdate
from airdrops_hunter.schemas.contact import ContactMessageCreate
from airdrops_hunter.schemas.newsletter import NewsletterSubscriptionCreate
from airdrops_hunter.services.db_storage import DatabaseStorage
from airdrops_hunter.services.storage import DuplicateRecordError, MemoryStorage, apply_patch


def make_airdrop(title="Test Airdrop", status="Active", category="DeFi", value="$100"):
    return AirdropCreate(
        title=title,
        project_name="Project",
        description="A description long enough.",
        category=category,
        estimated_value=value,
        status=status,
    )


def make_post(title="Test Post", category="Guide", published_at=None):
    return BlogPostCreate(
        title=title,
        content="Some content for the post.",
        category=category,
        published_at=published_at,
    )


class TestIdAssignment:
    """Ids are unique, increasing and independent per kind."""

    def test_ids_strictly_increase(self, storage):
        ids = [storage.create_airdrop(make_airdrop(f"Airdrop {i}")).id for i in range(5)]
        assert ids == sorted(set(ids))
        assert all(b > a for a, b in zip(ids, ids[1:], strict=False))

    def test_memory_ids_start_at_one(self, memory_storage):
        assert memory_storage.create_airdrop(make_airdrop()).id == 1
        assert memory_storage.create_blog_post(make_post()).id == 1

    def test_sequences_are_independent(self, storage):
        first_post = storage.create_blog_post(make_post())
        for i in range(3):
            storage.create_airdrop(make_airdrop(f"Airdrop {i}"))
        storage.create_contact_message(
            ContactMessageCreate(
                name="Alice", email="alice@example.com", subject="Hi", message="Hello there, team!"
            )
        )
        second_post = storage.create_blog_post(make_post("Second post"))

        assert second_post.id == first_post.id + 1

    def test_ids_not_reused_after_delete(self, storage):
        first = storage.create_airdrop(make_airdrop("First"))
        second = storage.create_airdrop(make_airdrop("Second"))
        assert storage.delete_airdrop(second.id)

        third = storage.create_airdrop(make_airdrop("Third"))
        assert third.id > second.id > first.id

    def test_concurrent_creates_get_distinct_ids(self):
        storage = MemoryStorage()

        def worker():
            for _ in range(50):
                storage.create_airdrop(make_airdrop())

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        ids = [airdrop.id for airdrop in storage.get_airdrops()]
        assert len(ids) == 200
        assert sorted(ids) == list(range(1, 201))


class TestCreateDefaults:
    """Optional fields resolve to null or a defined default."""

    def test_airdrop_defaults(self, storage):
        airdrop = storage.create_airdrop(make_airdrop())

        assert airdrop.participants == 0
        assert airdrop.requirements is None
        assert airdrop.logo_url is None
        assert airdrop.cover_image_url is None
        assert airdrop.start_date is None
        assert airdrop.end_date is None
        assert airdrop.created_at is not None

    def test_blog_post_published_at_defaults_to_now(self, storage):
        before = datetime.now(UTC)
        post = storage.create_blog_post(make_post())
        after = datetime.now(UTC)

        stored = storage.get_blog_post(post.id)
        assert before <= stored.published_at <= after
        assert stored.image_url is None
        assert stored.tags is None
        assert stored.author_id is None

    def test_blog_post_keeps_given_published_at(self, storage):
        published = datetime(2023, 6, 15, tzinfo=UTC)
        post = storage.create_blog_post(make_post(published_at=published))
        assert storage.get_blog_post(post.id).published_at == published

    def test_user_admin_flag_defaults_false(self, storage):
        user = storage.create_user("alice", "alice@example.com", "hash")
        assert user.is_admin is False


class TestReadsAndDeletes:
    """Lookups, listings and permanent deletion."""

    def test_get_missing_returns_none(self, storage):
        assert storage.get_airdrop(999) is None
        assert storage.get_blog_post(999) is None
        assert storage.get_user(999) is None

    def test_get_all_in_insertion_order(self, storage):
        titles = ["Alpha", "Beta", "Gamma"]
        for title in titles:
            storage.create_airdrop(make_airdrop(title))
        assert [airdrop.title for airdrop in storage.get_airdrops()] == titles

    def test_by_status_returns_exact_subset_in_order(self, storage):
        storage.create_airdrop(make_airdrop("A", status="Active"))
        storage.create_airdrop(make_airdrop("B", status="Upcoming"))
        storage.create_airdrop(make_airdrop("C", status="Active"))
        storage.create_airdrop(make_airdrop("D", status="active"))

        active = storage.get_airdrops_by_status("Active")
        assert [airdrop.title for airdrop in active] == ["A", "C"]

    def test_by_category(self, storage):
        storage.create_airdrop(make_airdrop("A", category="DeFi"))
        storage.create_airdrop(make_airdrop("B", category="Gaming"))
        storage.create_blog_post(make_post("Guide post", category="Guide"))
        storage.create_blog_post(make_post("Security post", category="Security"))

        assert [a.title for a in storage.get_airdrops_by_category("Gaming")] == ["B"]
        assert [p.title for p in storage.get_blog_posts_by_category("Security")] == [
            "Security post"
        ]

    def test_user_lookups(self, storage):
        user = storage.create_user("alice", "alice@example.com", "hash")

        assert storage.get_user_by_username("alice").id == user.id
        assert storage.get_user_by_email("alice@example.com").id == user.id
        assert storage.get_user_by_username("bob") is None

    def test_delete_then_read_is_not_found(self, storage):
        airdrop = storage.create_airdrop(make_airdrop())

        assert storage.delete_airdrop(airdrop.id) is True
        assert storage.get_airdrop(airdrop.id) is None
        assert storage.get_airdrops() == []

    def test_delete_missing_returns_false_without_side_effects(self, storage):
        airdrop = storage.create_airdrop(make_airdrop())
        post = storage.create_blog_post(make_post())

        assert storage.delete_airdrop(airdrop.id + 100) is False
        assert storage.delete_blog_post(post.id + 100) is False
        assert storage.get_airdrops() == [airdrop]
        assert [p.id for p in storage.get_blog_posts()] == [post.id]


class TestPartialUpdate:
    """Patch semantics: only sent fields change."""

    def test_empty_patch_leaves_record_unchanged(self, storage):
        airdrop = storage.create_airdrop(make_airdrop())
        updated = storage.update_airdrop(airdrop.id, AirdropUpdate())
        assert updated == storage.get_airdrop(airdrop.id)
        assert updated.model_dump() == airdrop.model_dump()

    def test_single_field_patch(self, storage):
        airdrop = storage.create_airdrop(make_airdrop())
        updated = storage.update_airdrop(airdrop.id, AirdropUpdate(status="Completed"))

        assert updated.status == "Completed"
        assert updated.model_dump(exclude={"status"}) == airdrop.model_dump(exclude={"status"})
        assert updated.id == airdrop.id
        assert updated.created_at == airdrop.created_at

    def test_patch_can_clear_nullable_field(self, storage):
        airdrop = storage.create_airdrop(
            make_airdrop().model_copy(update={"requirements": "Hold tokens"})
        )
        updated = storage.update_airdrop(airdrop.id, AirdropUpdate(requirements=None))
        assert updated.requirements is None

    def test_blog_post_patch(self, storage):
        post = storage.create_blog_post(make_post())
        updated = storage.update_blog_post(post.id, BlogPostUpdate(tags="one,two"))

        assert updated.tags == "one,two"
        assert updated.title == post.title
        assert updated.published_at == post.published_at

    def test_update_missing_returns_none(self, storage):
        assert storage.update_airdrop(42, AirdropUpdate(title="New title")) is None
        assert storage.update_blog_post(42, BlogPostUpdate(title="New title")) is None

    def test_apply_patch_returns_new_record(self, memory_storage):
        airdrop = memory_storage.create_airdrop(make_airdrop())
        patched = apply_patch(airdrop, {"title": "Changed", "id": 99, "created_at": None})

        assert patched is not airdrop
        assert patched.title == "Changed"
        assert patched.id == airdrop.id
        assert patched.created_at == airdrop.created_at
        assert airdrop.title == "Test Airdrop"


class TestUniqueness:
    """Usernames, user emails and newsletter emails are unique."""

    def test_duplicate_username_rejected_without_consuming_id(self, storage):
        first = storage.create_user("alice", "alice@example.com", "hash")

        with pytest.raises(DuplicateRecordError) as exc_info:
            storage.create_user("alice", "other@example.com", "hash")
        assert exc_info.value.field == "username"

        second = storage.create_user("bob", "bob@example.com", "hash")
        assert second.id == first.id + 1

    def test_duplicate_email_rejected(self, storage):
        storage.create_user("alice", "alice@example.com", "hash")

        with pytest.raises(DuplicateRecordError) as exc_info:
            storage.create_user("alice2", "alice@example.com", "hash")
        assert exc_info.value.field == "email"

    def test_lost_email_race_reports_email(self, db, monkeypatch):
        storage = DatabaseStorage(db)
        storage.create_user("alice", "shared@example.com", "hash")
        # Another registration took the email after the lookup
        monkeypatch.setattr(storage, "get_user_by_email", lambda email: None)

        with pytest.raises(DuplicateRecordError) as exc_info:
            storage.create_user("bob", "shared@example.com", "hash")
        assert exc_info.value.field == "email"

        carol = storage.create_user("carol", "carol@example.com", "hash")
        assert storage.get_user(carol.id).username == "carol"

    def test_duplicate_newsletter_email_rejected(self, storage):
        subscription = NewsletterSubscriptionCreate(email="fan@example.com", interests="DeFi")
        created = storage.create_newsletter_subscription(subscription)

        with pytest.raises(DuplicateRecordError):
            storage.create_newsletter_subscription(subscription)

        assert storage.get_newsletter_subscription_by_email("fan@example.com") == created
        assert len(storage.get_newsletter_subscriptions()) == 1


class TestAppendOnly:
    """Newsletter subscriptions and contact messages."""

    def test_newsletter_interests_optional(self, storage):
        subscription = storage.create_newsletter_subscription(
            NewsletterSubscriptionCreate(email="fan@example.com")
        )
        assert subscription.interests is None
        assert subscription.created_at is not None

    def test_contact_messages_listed_in_order(self, storage):
        for name in ["Alice", "Bob"]:
            storage.create_contact_message(
                ContactMessageCreate(
                    name=name,
                    email=f"{name.lower()}@example.com",
                    subject="Partnership",
                    message="We would like to list our airdrop.",
                )
            )
        assert [m.name for m in storage.get_contact_messages()] == ["Alice", "Bob"]
