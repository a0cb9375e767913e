"""Authentication schemas."""

from pydantic import EmailStr, Field, model_validator

from airdrops_hunter.schemas.base import CamelModel


class UserRegister(CamelModel):
    """User registration request."""

    username: str = Field(..., min_length=3, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=6, max_length=128)
    is_admin: bool = False


class RegisterForm(UserRegister):
    """Registration form with the confirm-password field.

    Only the client checks this; the server accepts ``UserRegister``.
    """

    confirm_password: str = Field(..., min_length=6, max_length=128)

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterForm":
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


class UserLogin(CamelModel):
    """User login request."""

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UserResponse(CamelModel):
    """User information response."""

    id: int
    username: str
    email: str
    is_admin: bool


class UserInDB(CamelModel):
    """Stored user record, including the password hash."""

    id: int
    username: str
    email: str
    password_hash: str
    is_admin: bool = False
