"""
app/core/security.py

Purpose: Credential hashing

- Argon2 digests for secrets at rest (salt and cost embedded in the digest)
- Verification that never raises on a wrong or malformed digest
"""

from typing import Optional

from argon2 import PasswordHasher, exceptions as argon_exc

_ph = PasswordHasher()


def hash_password(password: str) -> str:
    """Create an Argon2 digest for storage."""
    return _ph.hash(password)


def verify_password(password: str, stored_hash: Optional[str]) -> bool:
    """
    Checks a plaintext password against a stored digest.

    Returns False on mismatch and on empty or malformed digests.
    """
    if not stored_hash or password is None:
        return False
    try:
        return _ph.verify(stored_hash, password)
    except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHashError):
        return False
