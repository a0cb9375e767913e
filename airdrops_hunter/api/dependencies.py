"""FastAPI dependencies for storage and authentication."""

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from airdrops_hunter.config import get_settings
from airdrops_hunter.database import SessionLocal
from airdrops_hunter.schemas.auth import UserInDB
from airdrops_hunter.services.auth import decode_access_token
from airdrops_hunter.services.catalog import ValueParsing
from airdrops_hunter.services.db_storage import DatabaseStorage
from airdrops_hunter.services.storage import MemoryStorage, Storage

settings = get_settings()

# Session cookie is the primary carrier; Bearer is accepted for API clients
security = HTTPBearer(auto_error=False)

_memory_storage: MemoryStorage | None = None


def get_memory_storage() -> MemoryStorage:
    """Get the process-wide in-memory store."""
    global _memory_storage
    if _memory_storage is None:
        _memory_storage = MemoryStorage()
    return _memory_storage


def get_storage() -> Generator[Storage, None, None]:
    """Dependency that provides the configured storage backend."""
    if settings.storage_backend == "memory":
        yield get_memory_storage()
        return

    db = SessionLocal()
    try:
        yield DatabaseStorage(db)
    finally:
        db.close()


def get_value_parsing() -> ValueParsing:
    """Get the configured estimated-value parsing mode."""
    return ValueParsing(settings.high_value_parsing)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    storage: Annotated[Storage, Depends(get_storage)],
) -> UserInDB:
    """Get the current user from the session cookie or a Bearer token."""
    token = credentials.credentials if credentials else request.cookies.get(
        settings.session_cookie_name
    )
    if not token:
        raise _unauthorized("Not authenticated")

    payload = decode_access_token(token)
    if payload is None or payload.get("sub") is None:
        raise _unauthorized("Invalid authentication credentials")

    user = storage.get_user(int(payload["sub"]))
    if user is None:
        raise _unauthorized("User not found")

    return user


def get_admin_user(
    current_user: Annotated[UserInDB, Depends(get_current_user)],
) -> UserInDB:
    """Require the admin flag on the current user."""
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return current_user
