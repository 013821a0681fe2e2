"""
Account models for the credential service.

This module defines pydantic models for:
- Roles
- Stored accounts (with salt and password hash)
- The public view of an account returned to callers
"""
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field

class Role(str, Enum):
    """Account role."""
    USER = "user"
    ADMIN = "admin"

class PublicAccountView(BaseModel):
    """Account information returned to clients."""
    username: str
    email: str
    role: Role

    model_config = ConfigDict(frozen=True, use_enum_values=True)

class Account(BaseModel):
    """Stored account. Immutable once created; keyed by username."""
    username: str
    email: str
    role: Role
    salt: str = Field(..., repr=False)
    password_hash: str = Field(..., repr=False)

    model_config = ConfigDict(frozen=True)

    def public_view(self) -> PublicAccountView:
        """Return the account without its credential material."""
        return PublicAccountView(
            username=self.username,
            email=self.email,
            role=self.role
        )
