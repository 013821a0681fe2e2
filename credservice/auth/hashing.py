"""
Password hashing with bcrypt.

The salt is generated and stored separately from the hash so verification
can recompute ``hash_password(password, salt)`` and compare the results.
Passwords are reduced to a base64 SHA-256 digest before bcrypt, which only
reads the first 72 bytes of its input.
"""
import os
import hmac
import base64
import hashlib
import bcrypt

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", 10))

def _prehash(password: str) -> bytes:
    digest = hashlib.sha256(password.encode('utf-8')).digest()
    return base64.b64encode(digest)

def generate_salt(rounds: int = BCRYPT_ROUNDS) -> str:
    """Generate a fresh bcrypt salt with the given cost factor."""
    return bcrypt.gensalt(rounds=rounds).decode('utf-8')

def hash_password(password: str, salt: str) -> str:
    """Hash ``password`` with ``salt``. Same inputs always give the same hash."""
    return bcrypt.hashpw(
        _prehash(password),
        salt.encode('utf-8')
    ).decode('utf-8')

def verify_password(password: str, salt: str, password_hash: str) -> bool:
    """Recompute the hash with the stored salt and compare in constant time."""
    candidate = hash_password(password, salt)
    return hmac.compare_digest(
        candidate.encode('utf-8'),
        password_hash.encode('utf-8')
    )
