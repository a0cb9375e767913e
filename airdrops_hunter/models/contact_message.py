"""Contact message model."""

from sqlalchemy import Column, Integer, String, Text

from airdrops_hunter.database import Base
from airdrops_hunter.models.mixins import CreatedAtMixin


class ContactMessage(Base, CreatedAtMixin):
    """Append-only message sent through the contact form."""

    __tablename__ = "contact_messages"
    __table_args__ = {"sqlite_autoincrement": True}  # never reuse ids after a delete

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
