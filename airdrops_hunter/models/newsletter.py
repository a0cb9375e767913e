"""Newsletter subscription model."""

from sqlalchemy import Column, Integer, String, Text

from airdrops_hunter.database import Base
from airdrops_hunter.models.mixins import CreatedAtMixin


class NewsletterSubscription(Base, CreatedAtMixin):
    """Append-only newsletter signup."""

    __tablename__ = "newsletter_subscriptions"
    __table_args__ = {"sqlite_autoincrement": True}  # never reuse ids after a delete

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    interests = Column(Text, nullable=True)
