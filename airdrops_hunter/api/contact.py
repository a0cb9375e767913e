"""Contact form API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from airdrops_hunter.api.dependencies import get_admin_user, get_storage
from airdrops_hunter.schemas.auth import UserInDB
from airdrops_hunter.schemas.contact import ContactMessageCreate, ContactMessageResponse
from airdrops_hunter.services.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/contact", tags=["contact"])


@router.post("", response_model=ContactMessageResponse, status_code=status.HTTP_201_CREATED)
def send_message(
    message_data: ContactMessageCreate,
    storage: Annotated[Storage, Depends(get_storage)],
):
    """Store a message from the contact form."""
    message = storage.create_contact_message(message_data)
    logger.info(f"Contact message {message.id} received: {message.subject}")
    return message


@router.get("", response_model=list[ContactMessageResponse])
def list_messages(
    admin: Annotated[UserInDB, Depends(get_admin_user)],
    storage: Annotated[Storage, Depends(get_storage)],
):
    """List contact messages (admin only)."""
    return storage.get_contact_messages()
