"""
In-memory credential store.

This module provides the CredentialStore, which:
- Holds accounts keyed by username, with a secondary email index
- Enforces username and email uniqueness on registration
- Verifies login attempts against stored salted hashes
"""
import threading
from typing import Dict, Optional, Union
from credservice.auth import hashing
from credservice.auth.models import Account, PublicAccountView
from credservice.auth.results import AuthError, ConflictError
from credservice.auth.validation import RegistrationRequest

ACCOUNT_EXISTS = "account already exists"
USER_NOT_FOUND = "user not found"
CREDENTIALS_MISMATCH = "credentials do not match"

def _username_key(username: str) -> str:
    return username.strip()

def _email_key(email: str) -> str:
    return email.strip().casefold()

class CredentialStore:
    """
    Thread-safe in-memory account store.

    A single lock covers the account map and the email index so the
    uniqueness check and the insert happen as one step. Password hashing
    runs outside the lock.
    """
    def __init__(self, rounds: int = hashing.BCRYPT_ROUNDS):
        self.rounds = rounds
        self._lock = threading.Lock()
        self._accounts: Dict[str, Account] = {}
        # email key -> username
        self._email_index: Dict[str, str] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._accounts)

    def __contains__(self, username: object) -> bool:
        with self._lock:
            return username in self._accounts

    def find_by_username(self, username: str) -> Optional[Account]:
        """Exact-match lookup by username, ignoring surrounding whitespace."""
        with self._lock:
            return self._accounts.get(_username_key(username))

    def find_by_email(self, email: str) -> Optional[Account]:
        """Case-insensitive lookup by email, ignoring surrounding whitespace."""
        with self._lock:
            username = self._email_index.get(_email_key(email))
            if username is None:
                return None
            return self._accounts.get(username)

    def _is_taken(self, username: str, email: str) -> bool:
        # caller holds the lock
        return username in self._accounts or _email_key(email) in self._email_index

    def register(self, candidate: RegistrationRequest) -> Union[PublicAccountView, ConflictError]:
        """
        Register a validated candidate.

        Args:
            candidate: Validated registration data

        Returns:
            The new account's public view, or ConflictError if the username
            or email is already registered. The store is unchanged on conflict.
        """
        with self._lock:
            if self._is_taken(candidate.username, candidate.email):
                return ConflictError(message=ACCOUNT_EXISTS)

        salt = hashing.generate_salt(self.rounds)
        account = Account(
            username=candidate.username,
            email=candidate.email,
            role=candidate.role,
            salt=salt,
            password_hash=hashing.hash_password(candidate.password, salt)
        )

        with self._lock:
            # another registration may have won while we were hashing
            if self._is_taken(account.username, account.email):
                return ConflictError(message=ACCOUNT_EXISTS)
            self._accounts[account.username] = account
            self._email_index[_email_key(account.email)] = account.username

        return account.public_view()

    def authenticate(self, username: str, password: str) -> Union[PublicAccountView, AuthError]:
        """
        Verify a login attempt.

        Returns:
            The stored account's public view, or AuthError for an unknown
            username or a password mismatch
        """
        account = self.find_by_username(username)
        if account is None:
            return AuthError(message=USER_NOT_FOUND)
        if not hashing.verify_password(password, account.salt, account.password_hash):
            return AuthError(message=CREDENTIALS_MISMATCH)
        return account.public_view()
