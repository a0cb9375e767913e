"""Authentication service for JWT sessions and password handling."""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from airdrops_hunter.config import get_settings
from airdrops_hunter.schemas.auth import UserInDB
from airdrops_hunter.services.storage import Storage

logger = logging.getLogger(__name__)
settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: int, username: str) -> str:
    """Create a JWT access token."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "username": username,
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def authenticate_user(storage: Storage, username: str, password: str) -> UserInDB | None:
    """Authenticate a user by username and password.

    Unknown usernames still pay for one hash check so timing does not reveal
    which credential was wrong.
    """
    user = storage.get_user_by_username(username)
    if not user:
        pwd_context.dummy_verify()
        logger.info(f"Login failed for unknown user '{username}'")
        return None
    if not verify_password(password, user.password_hash):
        logger.info(f"Login failed for '{username}'")
        return None
    logger.info(f"Login succeeded for '{username}'")
    return user


def create_user(
    storage: Storage, username: str, email: str, password: str, is_admin: bool = False
) -> UserInDB:
    """Create a new user with a hashed password."""
    hashed_password = get_password_hash(password)
    return storage.create_user(username, email, hashed_password, is_admin=is_admin)
