"""SQLAlchemy models."""

from airdrops_hunter.models.airdrop import Airdrop
from airdrops_hunter.models.blog_post import BlogPost
from airdrops_hunter.models.contact_message import ContactMessage
from airdrops_hunter.models.newsletter import NewsletterSubscription
from airdrops_hunter.models.user import User

__all__ = [
    "User",
    "Airdrop",
    "BlogPost",
    "NewsletterSubscription",
    "ContactMessage",
]
