"""User and session API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from airdrops_hunter.api.dependencies import get_current_user, get_storage
from airdrops_hunter.config import get_settings
from airdrops_hunter.schemas.auth import UserInDB, UserLogin, UserRegister, UserResponse
from airdrops_hunter.services.auth import authenticate_user, create_access_token, create_user
from airdrops_hunter.services.storage import DuplicateRecordError, Storage

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/api/users", tags=["users"])


def set_session_cookie(response: Response, user: UserInDB) -> None:
    """Attach a signed session token to the response."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=create_access_token(user.id, user.username),
        max_age=settings.jwt_expiration_minutes * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


@router.get("/current", response_model=UserResponse)
def get_current(
    current_user: Annotated[UserInDB, Depends(get_current_user)],
):
    """Get the logged-in user."""
    return UserResponse.model_validate(current_user)


@router.post("/login", response_model=UserResponse)
def login(
    credentials: UserLogin,
    response: Response,
    storage: Annotated[Storage, Depends(get_storage)],
):
    """Login with username and password."""
    user = authenticate_user(storage, credentials.username, credentials.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    set_session_cookie(response, user)
    return UserResponse.model_validate(user)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(response: Response):
    """Logout by clearing the session cookie."""
    response.delete_cookie(settings.session_cookie_name)


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    storage: Annotated[Storage, Depends(get_storage)],
):
    """Register a new user."""
    if storage.get_user_by_username(user_data.username):
        logger.warning(f"Registration rejected, username taken: '{user_data.username}'")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already taken",
        )

    if storage.get_user_by_email(user_data.email):
        logger.warning(f"Registration rejected, email taken: '{user_data.email}'")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )

    try:
        user = create_user(
            storage,
            user_data.username,
            user_data.email,
            user_data.password,
            is_admin=user_data.is_admin,
        )
    except DuplicateRecordError as e:
        detail = "Username already taken" if e.field == "username" else "Email already registered"
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail) from e

    return UserResponse.model_validate(user)
