"""User model."""

from sqlalchemy import Boolean, Column, Integer, String

from airdrops_hunter.database import Base


class User(Base):
    """User model for authentication and the admin flag."""

    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}  # never reuse ids after a delete

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
