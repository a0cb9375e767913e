"""Relational storage backed by a SQLAlchemy session."""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from airdrops_hunter.models.airdrop import Airdrop
from airdrops_hunter.models.blog_post import BlogPost
from airdrops_hunter.models.contact_message import ContactMessage
from airdrops_hunter.models.mixins import utc_now
from airdrops_hunter.models.newsletter import NewsletterSubscription
from airdrops_hunter.models.user import User
from airdrops_hunter.schemas.airdrop import AirdropCreate, AirdropResponse, AirdropUpdate
from airdrops_hunter.schemas.auth import UserInDB
from airdrops_hunter.schemas.blog_post import BlogPostCreate, BlogPostResponse, BlogPostUpdate
from airdrops_hunter.schemas.contact import ContactMessageCreate, ContactMessageResponse
from airdrops_hunter.schemas.newsletter import (
    NewsletterSubscriptionCreate,
    NewsletterSubscriptionResponse,
)
from airdrops_hunter.services.storage import DuplicateRecordError, Storage, patch_fields

logger = logging.getLogger(__name__)


class DatabaseStorage(Storage):
    """Storage over the relational database.

    Ids come from the table's serial primary key. Uniqueness of usernames,
    user emails and newsletter emails is enforced by unique constraints.
    """

    def __init__(self, db: Session):
        self.db = db

    def _add(self, row: Any) -> Any:
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row

    def _patch(self, model: Any, record_id: int, changes: dict[str, Any]) -> Any:
        row = self.db.query(model).filter(model.id == record_id).first()
        if row is None:
            return None
        if changes:
            self.db.query(model).filter(model.id == record_id).update(
                changes, synchronize_session=False
            )
            self.db.commit()
            self.db.refresh(row)
        return row

    def _delete(self, model: Any, record_id: int) -> bool:
        deleted = self.db.query(model).filter(model.id == record_id).delete()
        self.db.commit()
        return deleted > 0

    # Users
    def get_user(self, user_id: int) -> UserInDB | None:
        user = self.db.query(User).filter(User.id == user_id).first()
        return UserInDB.model_validate(user) if user else None

    def get_user_by_username(self, username: str) -> UserInDB | None:
        user = self.db.query(User).filter(User.username == username).first()
        return UserInDB.model_validate(user) if user else None

    def get_user_by_email(self, email: str) -> UserInDB | None:
        user = self.db.query(User).filter(User.email == email).first()
        return UserInDB.model_validate(user) if user else None

    def create_user(
        self, username: str, email: str, password_hash: str, is_admin: bool = False
    ) -> UserInDB:
        if self.get_user_by_username(username):
            raise DuplicateRecordError("username", username)
        if self.get_user_by_email(email):
            raise DuplicateRecordError("email", email)

        user = User(username=username, email=email, password_hash=password_hash, is_admin=is_admin)
        try:
            user = self._add(user)
        except IntegrityError as e:
            # Lost a race with a concurrent registration
            self.db.rollback()
            if self.get_user_by_username(username):
                raise DuplicateRecordError("username", username) from e
            raise DuplicateRecordError("email", email) from e
        logger.info(f"Created user {user.id} ({user.username})")
        return UserInDB.model_validate(user)

    # Airdrops
    def get_airdrops(self) -> list[AirdropResponse]:
        rows = self.db.query(Airdrop).order_by(Airdrop.id).all()
        return [AirdropResponse.model_validate(row) for row in rows]

    def get_airdrops_by_status(self, status: str) -> list[AirdropResponse]:
        rows = self.db.query(Airdrop).filter(Airdrop.status == status).order_by(Airdrop.id).all()
        return [AirdropResponse.model_validate(row) for row in rows]

    def get_airdrops_by_category(self, category: str) -> list[AirdropResponse]:
        rows = (
            self.db.query(Airdrop)
            .filter(Airdrop.category == category)
            .order_by(Airdrop.id)
            .all()
        )
        return [AirdropResponse.model_validate(row) for row in rows]

    def get_airdrop(self, airdrop_id: int) -> AirdropResponse | None:
        row = self.db.query(Airdrop).filter(Airdrop.id == airdrop_id).first()
        return AirdropResponse.model_validate(row) if row else None

    def create_airdrop(self, airdrop: AirdropCreate) -> AirdropResponse:
        row = self._add(Airdrop(**airdrop.model_dump(), created_at=utc_now()))
        return AirdropResponse.model_validate(row)

    def update_airdrop(self, airdrop_id: int, changes: AirdropUpdate) -> AirdropResponse | None:
        row = self._patch(Airdrop, airdrop_id, patch_fields(changes))
        return AirdropResponse.model_validate(row) if row else None

    def delete_airdrop(self, airdrop_id: int) -> bool:
        return self._delete(Airdrop, airdrop_id)

    # Blog posts
    def get_blog_posts(self) -> list[BlogPostResponse]:
        rows = self.db.query(BlogPost).order_by(BlogPost.id).all()
        return [BlogPostResponse.model_validate(row) for row in rows]

    def get_blog_posts_by_category(self, category: str) -> list[BlogPostResponse]:
        rows = (
            self.db.query(BlogPost)
            .filter(BlogPost.category == category)
            .order_by(BlogPost.id)
            .all()
        )
        return [BlogPostResponse.model_validate(row) for row in rows]

    def get_blog_post(self, post_id: int) -> BlogPostResponse | None:
        row = self.db.query(BlogPost).filter(BlogPost.id == post_id).first()
        return BlogPostResponse.model_validate(row) if row else None

    def create_blog_post(self, post: BlogPostCreate) -> BlogPostResponse:
        data = post.model_dump()
        data["published_at"] = data["published_at"] or utc_now()
        row = self._add(BlogPost(**data))
        return BlogPostResponse.model_validate(row)

    def update_blog_post(self, post_id: int, changes: BlogPostUpdate) -> BlogPostResponse | None:
        row = self._patch(BlogPost, post_id, patch_fields(changes))
        return BlogPostResponse.model_validate(row) if row else None

    def delete_blog_post(self, post_id: int) -> bool:
        return self._delete(BlogPost, post_id)

    # Newsletter subscriptions
    def get_newsletter_subscriptions(self) -> list[NewsletterSubscriptionResponse]:
        rows = self.db.query(NewsletterSubscription).order_by(NewsletterSubscription.id).all()
        return [NewsletterSubscriptionResponse.model_validate(row) for row in rows]

    def get_newsletter_subscription_by_email(
        self, email: str
    ) -> NewsletterSubscriptionResponse | None:
        row = (
            self.db.query(NewsletterSubscription)
            .filter(NewsletterSubscription.email == email)
            .first()
        )
        return NewsletterSubscriptionResponse.model_validate(row) if row else None

    def create_newsletter_subscription(
        self, subscription: NewsletterSubscriptionCreate
    ) -> NewsletterSubscriptionResponse:
        if self.get_newsletter_subscription_by_email(subscription.email):
            raise DuplicateRecordError("email", subscription.email)
        try:
            row = self._add(
                NewsletterSubscription(**subscription.model_dump(), created_at=utc_now())
            )
        except IntegrityError:
            self.db.rollback()
            raise DuplicateRecordError("email", subscription.email) from None
        return NewsletterSubscriptionResponse.model_validate(row)

    # Contact messages
    def get_contact_messages(self) -> list[ContactMessageResponse]:
        rows = self.db.query(ContactMessage).order_by(ContactMessage.id).all()
        return [ContactMessageResponse.model_validate(row) for row in rows]

    def create_contact_message(self, message: ContactMessageCreate) -> ContactMessageResponse:
        row = self._add(ContactMessage(**message.model_dump(), created_at=utc_now()))
        return ContactMessageResponse.model_validate(row)
