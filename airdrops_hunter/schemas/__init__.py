"""Pydantic schemas for API requests and responses."""

from airdrops_hunter.schemas.airdrop import AirdropCreate, AirdropResponse, AirdropUpdate
from airdrops_hunter.schemas.auth import (
    RegisterForm,
    UserInDB,
    UserLogin,
    UserRegister,
    UserResponse,
)
from airdrops_hunter.schemas.blog_post import BlogPostCreate, BlogPostResponse, BlogPostUpdate
from airdrops_hunter.schemas.contact import ContactMessageCreate, ContactMessageResponse
from airdrops_hunter.schemas.newsletter import (
    NewsletterSubscriptionCreate,
    NewsletterSubscriptionResponse,
)

__all__ = [
    "UserRegister",
    "RegisterForm",
    "UserLogin",
    "UserResponse",
    "UserInDB",
    "AirdropCreate",
    "AirdropUpdate",
    "AirdropResponse",
    "BlogPostCreate",
    "BlogPostUpdate",
    "BlogPostResponse",
    "NewsletterSubscriptionCreate",
    "NewsletterSubscriptionResponse",
    "ContactMessageCreate",
    "ContactMessageResponse",
]
