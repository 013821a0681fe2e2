"""
Authentication router.

This module provides the FastAPI router for authentication endpoints:
- Account registration
- Login
- Service ping
"""
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError as PydanticValidationError

from credservice.base_microservice import BaseMicroservice
from credservice.auth.models import PublicAccountView
from credservice.auth.results import AuthError, CredentialError, ValidationError
from credservice.auth.store import CredentialStore
from credservice.auth.validation import LoginRequest, validate

# Create router
router = APIRouter(tags=["auth"])

# Create service instance
base_service = BaseMicroservice("auth")

# Process-wide store; routes receive it through get_credential_store
credential_store = CredentialStore()

def get_credential_store() -> CredentialStore:
    """Dependency returning the credential store."""
    return credential_store

async def start_auth_service():
    """Initialize the auth service."""
    base_service.log_event("service.startup", {
        "service": "auth",
        "bcrypt_rounds": credential_store.rounds
    })

def _raise_for(error: CredentialError):
    headers = None
    if isinstance(error, AuthError):
        headers = {"WWW-Authenticate": "Basic"}
    raise HTTPException(
        status_code=error.status_code,
        detail=error.message,
        headers=headers
    )

async def _read_json(request: Request):
    try:
        return await request.json()
    except ValueError:
        return None

# --- Basic Auth Endpoints ---

@router.get("/ping")
async def ping(store: CredentialStore = Depends(get_credential_store)):
    """Liveness check for the auth service."""
    return base_service.mcp_response(
        message="Auth service is alive",
        data={
            "timestamp": datetime.utcnow().isoformat(),
            "accounts": len(store)
        }
    )

@router.post("/register", response_model=PublicAccountView)
async def register_account(
    request: Request,
    store: CredentialStore = Depends(get_credential_store)
):
    """
    Register a new account.

    Expects JSON: {"username", "email", "role", "password"}

    Returns:
        The account's public view. 400 on invalid input, 409 if the
        username or email is already registered.
    """
    payload = await _read_json(request)
    candidate = validate(payload)
    if isinstance(candidate, ValidationError):
        base_service.log_event("account.register.rejected", {
            "reason": "validation",
            "errors": list(candidate.errors) or [candidate.message]
        })
        _raise_for(candidate)

    try:
        result = await run_in_threadpool(store.register, candidate)
    except Exception as e:
        base_service.log_error(e, context="Account registration")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Registration failed"
        )

    if isinstance(result, CredentialError):
        base_service.log_event("account.register.rejected", {
            "reason": "conflict",
            "username": candidate.username
        })
        _raise_for(result)

    base_service.log_event("account.registered", {
        "username": result.username,
        "role": result.role
    })
    return result

@router.post("/login", response_model=PublicAccountView)
async def login(
    request: Request,
    store: CredentialStore = Depends(get_credential_store)
):
    """
    Authenticate an account.

    Expects JSON: {"username", "password"}

    Returns:
        The account's public view. 401 for any failure.
    """
    payload = await _read_json(request)
    try:
        login_data = LoginRequest.model_validate(payload)
    except PydanticValidationError:
        base_service.log_event("account.login.failed", {"reason": "malformed request"})
        _raise_for(AuthError(message="Invalid login request"))

    try:
        result = await run_in_threadpool(
            store.authenticate, login_data.username, login_data.password
        )
    except Exception as e:
        base_service.log_error(e, context="Account login")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Login failed"
        )

    if isinstance(result, CredentialError):
        base_service.log_event("account.login.failed", {
            "username": login_data.username,
            "reason": result.message
        })
        _raise_for(result)

    base_service.log_event("account.login", {"username": result.username})
    return result
