"""Entity storage interface and the in-memory implementation.

Every entity kind has its own id sequence starting at 1. Ids are assigned and
the record inserted under a per-kind lock, so concurrent creates never share
an id, and ids are never reused after a delete.
"""

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator
from itertools import count
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from airdrops_hunter.models.mixins import utc_now
from airdrops_hunter.schemas.airdrop import AirdropCreate, AirdropResponse, AirdropUpdate
from airdrops_hunter.schemas.auth import UserInDB
from airdrops_hunter.schemas.blog_post import BlogPostCreate, BlogPostResponse, BlogPostUpdate
from airdrops_hunter.schemas.contact import ContactMessageCreate, ContactMessageResponse
from airdrops_hunter.schemas.newsletter import (
    NewsletterSubscriptionCreate,
    NewsletterSubscriptionResponse,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

# Never overwritten by a patch
IMMUTABLE_FIELDS = frozenset({"id", "created_at", "published_at"})


class StorageError(Exception):
    """Base error raised by storage backends."""


class DuplicateRecordError(StorageError):
    """A create would violate a uniqueness constraint."""

    def __init__(self, field: str, value: str):
        super().__init__(f"{field} '{value}' already exists")
        self.field = field
        self.value = value


def patch_fields(changes: BaseModel) -> dict[str, Any]:
    """Return only the fields the client explicitly sent."""
    return {
        key: value
        for key, value in changes.model_dump(exclude_unset=True).items()
        if key not in IMMUTABLE_FIELDS
    }


def apply_patch(record: RecordT, changes: dict[str, Any]) -> RecordT:
    """Return a copy of ``record`` with only the named fields overwritten."""
    allowed = {key: value for key, value in changes.items() if key not in IMMUTABLE_FIELDS}
    return record.model_copy(update=allowed)


class Storage(ABC):
    """CRUD contract shared by the in-memory and database backends."""

    # Users
    @abstractmethod
    def get_user(self, user_id: int) -> UserInDB | None: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> UserInDB | None: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> UserInDB | None: ...

    @abstractmethod
    def create_user(
        self, username: str, email: str, password_hash: str, is_admin: bool = False
    ) -> UserInDB:
        """Create a user. Raises DuplicateRecordError on a taken username or email."""

    # Airdrops
    @abstractmethod
    def get_airdrops(self) -> list[AirdropResponse]: ...

    @abstractmethod
    def get_airdrops_by_status(self, status: str) -> list[AirdropResponse]: ...

    @abstractmethod
    def get_airdrops_by_category(self, category: str) -> list[AirdropResponse]: ...

    @abstractmethod
    def get_airdrop(self, airdrop_id: int) -> AirdropResponse | None: ...

    @abstractmethod
    def create_airdrop(self, airdrop: AirdropCreate) -> AirdropResponse: ...

    @abstractmethod
    def update_airdrop(self, airdrop_id: int, changes: AirdropUpdate) -> AirdropResponse | None: ...

    @abstractmethod
    def delete_airdrop(self, airdrop_id: int) -> bool: ...

    # Blog posts
    @abstractmethod
    def get_blog_posts(self) -> list[BlogPostResponse]: ...

    @abstractmethod
    def get_blog_posts_by_category(self, category: str) -> list[BlogPostResponse]: ...

    @abstractmethod
    def get_blog_post(self, post_id: int) -> BlogPostResponse | None: ...

    @abstractmethod
    def create_blog_post(self, post: BlogPostCreate) -> BlogPostResponse: ...

    @abstractmethod
    def update_blog_post(self, post_id: int, changes: BlogPostUpdate) -> BlogPostResponse | None: ...

    @abstractmethod
    def delete_blog_post(self, post_id: int) -> bool: ...

    # Newsletter subscriptions
    @abstractmethod
    def get_newsletter_subscriptions(self) -> list[NewsletterSubscriptionResponse]: ...

    @abstractmethod
    def get_newsletter_subscription_by_email(
        self, email: str
    ) -> NewsletterSubscriptionResponse | None: ...

    @abstractmethod
    def create_newsletter_subscription(
        self, subscription: NewsletterSubscriptionCreate
    ) -> NewsletterSubscriptionResponse:
        """Subscribe an email. Raises DuplicateRecordError if already subscribed."""

    # Contact messages
    @abstractmethod
    def get_contact_messages(self) -> list[ContactMessageResponse]: ...

    @abstractmethod
    def create_contact_message(self, message: ContactMessageCreate) -> ContactMessageResponse: ...


class Collection(Generic[RecordT]):
    """Records of one entity kind, keyed by id, with their own id sequence."""

    def __init__(self) -> None:
        self._records: dict[int, RecordT] = {}
        self._ids = count(1)
        self._lock = threading.Lock()

    def __iter__(self) -> Iterator[RecordT]:
        with self._lock:
            return iter(list(self._records.values()))

    def __len__(self) -> int:
        return len(self._records)

    def insert(
        self,
        build: Callable[[int], RecordT],
        check: Callable[[Iterable[RecordT]], None] | None = None,
    ) -> RecordT:
        """Assign the next id and store the record built for it.

        ``check`` runs under the lock before an id is taken, so a rejected
        insert leaves the sequence untouched.
        """
        with self._lock:
            if check is not None:
                check(self._records.values())
            record = build(next(self._ids))
            self._records[record.id] = record
            return record

    def get(self, record_id: int) -> RecordT | None:
        return self._records.get(record_id)

    def find(self, predicate: Callable[[RecordT], bool]) -> list[RecordT]:
        return [record for record in self if predicate(record)]

    def first(self, predicate: Callable[[RecordT], bool]) -> RecordT | None:
        return next((record for record in self if predicate(record)), None)

    def patch(self, record_id: int, changes: dict[str, Any]) -> RecordT | None:
        with self._lock:
            existing = self._records.get(record_id)
            if existing is None:
                return None
            updated = apply_patch(existing, changes)
            self._records[record_id] = updated
            return updated

    def remove(self, record_id: int) -> bool:
        with self._lock:
            return self._records.pop(record_id, None) is not None


class MemoryStorage(Storage):
    """Process-local storage backed by dictionaries."""

    def __init__(self) -> None:
        self.users: Collection[UserInDB] = Collection()
        self.airdrops: Collection[AirdropResponse] = Collection()
        self.blog_posts: Collection[BlogPostResponse] = Collection()
        self.newsletter_subscriptions: Collection[NewsletterSubscriptionResponse] = Collection()
        self.contact_messages: Collection[ContactMessageResponse] = Collection()

    # Users
    def get_user(self, user_id: int) -> UserInDB | None:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> UserInDB | None:
        return self.users.first(lambda user: user.username == username)

    def get_user_by_email(self, email: str) -> UserInDB | None:
        return self.users.first(lambda user: user.email == email)

    def create_user(
        self, username: str, email: str, password_hash: str, is_admin: bool = False
    ) -> UserInDB:
        def check(users: Iterable[UserInDB]) -> None:
            for user in users:
                if user.username == username:
                    raise DuplicateRecordError("username", username)
                if user.email == email:
                    raise DuplicateRecordError("email", email)

        user = self.users.insert(
            lambda user_id: UserInDB(
                id=user_id,
                username=username,
                email=email,
                password_hash=password_hash,
                is_admin=is_admin,
            ),
            check=check,
        )
        logger.info(f"Created user {user.id} ({user.username})")
        return user

    # Airdrops
    def get_airdrops(self) -> list[AirdropResponse]:
        return list(self.airdrops)

    def get_airdrops_by_status(self, status: str) -> list[AirdropResponse]:
        return self.airdrops.find(lambda airdrop: airdrop.status == status)

    def get_airdrops_by_category(self, category: str) -> list[AirdropResponse]:
        return self.airdrops.find(lambda airdrop: airdrop.category == category)

    def get_airdrop(self, airdrop_id: int) -> AirdropResponse | None:
        return self.airdrops.get(airdrop_id)

    def create_airdrop(self, airdrop: AirdropCreate) -> AirdropResponse:
        data = airdrop.model_dump()
        return self.airdrops.insert(
            lambda airdrop_id: AirdropResponse(id=airdrop_id, created_at=utc_now(), **data)
        )

    def update_airdrop(self, airdrop_id: int, changes: AirdropUpdate) -> AirdropResponse | None:
        return self.airdrops.patch(airdrop_id, patch_fields(changes))

    def delete_airdrop(self, airdrop_id: int) -> bool:
        return self.airdrops.remove(airdrop_id)

    # Blog posts
    def get_blog_posts(self) -> list[BlogPostResponse]:
        return list(self.blog_posts)

    def get_blog_posts_by_category(self, category: str) -> list[BlogPostResponse]:
        return self.blog_posts.find(lambda post: post.category == category)

    def get_blog_post(self, post_id: int) -> BlogPostResponse | None:
        return self.blog_posts.get(post_id)

    def create_blog_post(self, post: BlogPostCreate) -> BlogPostResponse:
        data = post.model_dump()
        data["published_at"] = data["published_at"] or utc_now()
        return self.blog_posts.insert(lambda post_id: BlogPostResponse(id=post_id, **data))

    def update_blog_post(self, post_id: int, changes: BlogPostUpdate) -> BlogPostResponse | None:
        return self.blog_posts.patch(post_id, patch_fields(changes))

    def delete_blog_post(self, post_id: int) -> bool:
        return self.blog_posts.remove(post_id)

    # Newsletter subscriptions
    def get_newsletter_subscriptions(self) -> list[NewsletterSubscriptionResponse]:
        return list(self.newsletter_subscriptions)

    def get_newsletter_subscription_by_email(
        self, email: str
    ) -> NewsletterSubscriptionResponse | None:
        return self.newsletter_subscriptions.first(lambda sub: sub.email == email)

    def create_newsletter_subscription(
        self, subscription: NewsletterSubscriptionCreate
    ) -> NewsletterSubscriptionResponse:
        data = subscription.model_dump()

        def check(subscriptions: Iterable[NewsletterSubscriptionResponse]) -> None:
            for existing in subscriptions:
                if existing.email == data["email"]:
                    raise DuplicateRecordError("email", data["email"])

        return self.newsletter_subscriptions.insert(
            lambda sub_id: NewsletterSubscriptionResponse(id=sub_id, created_at=utc_now(), **data),
            check=check,
        )

    # Contact messages
    def get_contact_messages(self) -> list[ContactMessageResponse]:
        return list(self.contact_messages)

    def create_contact_message(self, message: ContactMessageCreate) -> ContactMessageResponse:
        data = message.model_dump()
        return self.contact_messages.insert(
            lambda message_id: ContactMessageResponse(
                id=message_id, created_at=utc_now(), **data
            )
        )
