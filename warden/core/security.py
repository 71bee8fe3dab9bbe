"""Password hashing (Argon2id) and opaque token generation."""

import re
import secrets
import time

from argon2 import PasswordHasher
from argon2.exceptions import VerificationError

# Argon2id with the library's default memory/time cost. Salt, parameters and
# digest are all encoded in the returned PHC string.
_hasher = PasswordHasher()

# 32 random bytes -> 43 URL-safe base64 characters (256 bits of entropy).
TOKEN_BYTES = 32
TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
TOKEN_MAX_LEN = 256

USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MAX_LEN = 1024


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Raises argon2.exceptions.HashingError on failure."""
    return _hasher.hash(plain_password)


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Malformed or non-ASCII hashes never verify."""
    try:
        return _hasher.verify(hashed, plain_password)
    except (VerificationError, ValueError):
        return False


def needs_rehash(hashed: str) -> bool:
    """True if the stored hash was made with different parameters than the current hasher."""
    try:
        return _hasher.check_needs_rehash(hashed)
    except ValueError:
        return True


def password_meets_requirements(plain_password: str, min_length: int) -> bool:
    """Length is the only rule; no composition requirements."""
    return len(plain_password) >= min_length


def generate_token_string() -> str:
    """Fresh opaque bearer token; uniqueness relies on entropy, not on a store check."""
    return secrets.token_urlsafe(TOKEN_BYTES)


def is_well_formed_token(value: str) -> bool:
    return 0 < len(value) <= TOKEN_MAX_LEN and TOKEN_PATTERN.match(value) is not None


def now_millis() -> int:
    """Current wall-clock time as epoch milliseconds."""
    return time.time_ns() // 1_000_000
