"""
Registration input validation.

This module provides:
- Request models for registration and login
- Username and password policy checks
- ``validate`` which turns a raw payload into a candidate or a ValidationError
"""
import re
from typing import Any, Mapping, Tuple, Union
from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError
from credservice.auth.models import Role
from credservice.auth.results import ValidationError

# Regex patterns for validation
USERNAME_PATTERN = r"^[a-zA-Z0-9]+$"
LOWERCASE_PATTERN = r"[a-z]"
UPPERCASE_PATTERN = r"[A-Z]"
# printable ASCII (space to tilde) minus 0-9, A-Z, a-z
SPECIAL_PATTERN = r"[ -/:-@\[-`{-~]"

PASSWORD_MIN_LENGTH = 5
PASSWORD_MAX_LENGTH = 24
PASSWORD_POLICY_MESSAGE = (
    "Your password must be 5 to 24 characters and at least have "
    "1 uppercase, 1 lowercase and 1 special character"
)

def strip_whitespace(v):
    if isinstance(v, str):
        return v.strip()
    return v

# Pydantic models for request validation
class RegistrationRequest(BaseModel):
    """Model for user registration. A validated instance is the registration candidate."""
    username: str = Field(..., min_length=3, max_length=24)
    email: EmailStr
    role: Role
    password: str = Field(..., repr=False)

    @field_validator('username', 'email', mode='before')
    @classmethod
    def trim_identity(cls, v):
        return strip_whitespace(v)

    @field_validator('username')
    @classmethod
    def username_must_be_alphanumeric(cls, v):
        if not re.match(USERNAME_PATTERN, v):
            raise PydanticCustomError(
                'username_alphanumeric',
                'Username must only contain letters and numbers'
            )
        return v

    @field_validator('password')
    @classmethod
    def password_must_be_strong(cls, v):
        if not (
            PASSWORD_MIN_LENGTH <= len(v) <= PASSWORD_MAX_LENGTH
            and re.search(LOWERCASE_PATTERN, v)
            and re.search(UPPERCASE_PATTERN, v)
            and re.search(SPECIAL_PATTERN, v)
        ):
            raise PydanticCustomError('password_policy', PASSWORD_POLICY_MESSAGE)
        return v

class LoginRequest(BaseModel):
    """Model for user login. The username is trimmed the same way as on registration."""
    username: str
    password: str = Field(..., repr=False)

    @field_validator('username', mode='before')
    @classmethod
    def trim_username(cls, v):
        return strip_whitespace(v)

def _format_errors(exc: PydanticValidationError) -> Tuple[str, ...]:
    messages = []
    for error in exc.errors(include_url=False):
        field = ".".join(str(part) for part in error["loc"])
        messages.append(f"{field}: {error['msg']}" if field else error["msg"])
    return tuple(messages)

def validate(raw: Any) -> Union[RegistrationRequest, ValidationError]:
    """
    Validate a raw registration payload.

    Args:
        raw: Decoded request body

    Returns:
        The validated candidate, or a ValidationError whose message is the
        first failing rule in field order and whose ``errors`` lists all of them
    """
    if not isinstance(raw, Mapping):
        return ValidationError(message="Request body must be a JSON object")
    try:
        return RegistrationRequest.model_validate(dict(raw))
    except PydanticValidationError as exc:
        errors = _format_errors(exc)
        return ValidationError(message=errors[0], errors=errors)
