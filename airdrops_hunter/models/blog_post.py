"""Blog post model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from airdrops_hunter.database import Base
from airdrops_hunter.models.mixins import utc_now


class BlogPost(Base):
    """Blog article shown in the catalog."""

    __tablename__ = "blog_posts"
    __table_args__ = {"sqlite_autoincrement": True}  # never reuse ids after a delete

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    category = Column(String(100), nullable=False, index=True)
    image_url = Column(String, nullable=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    tags = Column(String, nullable=True)  # comma-separated
    published_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
