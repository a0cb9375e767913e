"""Blog post API endpoints."""

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status

from airdrops_hunter.api.dependencies import get_storage
from airdrops_hunter.schemas.blog_post import BlogPostCreate, BlogPostResponse, BlogPostUpdate
from airdrops_hunter.services.catalog import filter_blog_posts, sort_by_recency
from airdrops_hunter.services.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/blog-posts", tags=["blog-posts"])


@router.get("", response_model=list[BlogPostResponse])
def list_blog_posts(
    storage: Annotated[Storage, Depends(get_storage)],
    category: str | None = None,
    search: str | None = None,
    sort: Literal["recent"] | None = None,
    limit: Annotated[int | None, Query(ge=1)] = None,
):
    """List blog posts, optionally filtered and sorted newest first."""
    posts = filter_blog_posts(storage.get_blog_posts(), category=category, search=search)
    if sort == "recent":
        posts = sort_by_recency(posts)
    return posts[:limit] if limit else posts


@router.get("/category/{category}", response_model=list[BlogPostResponse])
def list_blog_posts_by_category(
    category: str,
    storage: Annotated[Storage, Depends(get_storage)],
):
    """List blog posts in an exact category."""
    return storage.get_blog_posts_by_category(category)


@router.get("/{post_id}", response_model=BlogPostResponse)
def get_blog_post(
    post_id: int,
    storage: Annotated[Storage, Depends(get_storage)],
):
    """Get a single blog post."""
    post = storage.get_blog_post(post_id)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blog post not found")
    return post


@router.post("", response_model=BlogPostResponse, status_code=status.HTTP_201_CREATED)
def create_blog_post(
    post_data: BlogPostCreate,
    storage: Annotated[Storage, Depends(get_storage)],
):
    """Create a new blog post. publishedAt defaults to now."""
    post = storage.create_blog_post(post_data)
    logger.info(f"Created blog post {post.id} ({post.title})")
    return post


@router.put("/{post_id}", response_model=BlogPostResponse)
def update_blog_post(
    post_id: int,
    post_data: BlogPostUpdate,
    storage: Annotated[Storage, Depends(get_storage)],
):
    """Update a blog post. Fields not sent keep their values."""
    post = storage.update_blog_post(post_id, post_data)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blog post not found")
    return post


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_blog_post(
    post_id: int,
    storage: Annotated[Storage, Depends(get_storage)],
):
    """Delete a blog post permanently."""
    if not storage.delete_blog_post(post_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blog post not found")
    logger.info(f"Deleted blog post {post_id}")
