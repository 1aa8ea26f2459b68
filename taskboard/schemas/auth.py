"""Auth Schemas — registration, login and current-user payloads.

Invariants:
    - Passwords accepted on input only; no response model carries one
    - email must contain exactly one '@' with text on both sides, stripped
"""

from pydantic import Field, field_validator

from taskboard.core.records import AuthenticatedUser, User
from taskboard.schemas.common import CamelModel, required_text


class RegisterRequest(CamelModel):
    name: str | None = Field(None, max_length=200, validate_default=True)
    email: str = Field(max_length=320, pattern=r"^\s*[^@\s]+@[^@\s]+\s*$")
    password: str = Field(min_length=6, max_length=200)

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str | None) -> str:
        return required_text(v, "Name is required")

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        return v.strip()


class LoginRequest(CamelModel):
    email: str = Field(min_length=1, max_length=320)
    password: str = Field(min_length=1, max_length=200)

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        return v.strip()


class UserResponse(CamelModel):
    """Public user data."""
    id: str
    name: str
    email: str

    @classmethod
    def from_identity(cls, user: User | AuthenticatedUser) -> "UserResponse":
        return cls(id=user.id, name=user.name, email=user.email)
