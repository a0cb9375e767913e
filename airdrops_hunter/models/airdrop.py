"""Airdrop model."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from airdrops_hunter.database import Base
from airdrops_hunter.models.mixins import CreatedAtMixin


class Airdrop(Base, CreatedAtMixin):
    """A cataloged token-distribution opportunity."""

    __tablename__ = "airdrops"
    __table_args__ = {"sqlite_autoincrement": True}  # never reuse ids after a delete

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    project_name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(Text, nullable=True)
    category = Column(String(100), nullable=False, index=True)
    estimated_value = Column(String(100), nullable=False)
    status = Column(String(50), nullable=False, index=True)  # Active, Upcoming, Ending Soon, Completed
    participants = Column(Integer, default=0, nullable=False)
    logo_url = Column(String, nullable=True)
    cover_image_url = Column(String, nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)
