"""
Outcome types for credential operations.

Store and validator operations return either their success value or one of
the error variants below. Callers check the outcome with ``isinstance``
against ``CredentialError`` and translate it at the HTTP boundary.
"""
from dataclasses import dataclass
from typing import ClassVar, Tuple

from fastapi import status

@dataclass(frozen=True)
class CredentialError:
    """Base error variant: a caller-facing message and a status category."""
    message: str

    status_code: ClassVar[int] = status.HTTP_400_BAD_REQUEST

    def __str__(self) -> str:
        return self.message

@dataclass(frozen=True)
class ValidationError(CredentialError):
    """Registration input is malformed or violates policy."""
    errors: Tuple[str, ...] = ()

    status_code: ClassVar[int] = status.HTTP_400_BAD_REQUEST

@dataclass(frozen=True)
class ConflictError(CredentialError):
    """Username or email is already registered."""
    status_code: ClassVar[int] = status.HTTP_409_CONFLICT

@dataclass(frozen=True)
class AuthError(CredentialError):
    """Unknown username or password mismatch."""
    status_code: ClassVar[int] = status.HTTP_401_UNAUTHORIZED

