"""
Password hashing.

Passwords are stored as ``"<hex scrypt digest>.<hex salt>"``. The hex salt
string itself is the scrypt salt, which keeps hashes created by earlier
deployments of the service verifiable.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets

SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1
KEY_LENGTH = 64


def _scrypt(password: str, salt: str) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt.encode("utf-8"),
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        dklen=KEY_LENGTH,
    )


def hash_password(password: str) -> str:
    """Hash a password with a fresh random salt.

    Args:
        password: Plain text password

    Returns:
        Stored password string in ``hash.salt`` form
    """
    salt = secrets.token_hex(16)
    return f"{_scrypt(password, salt).hex()}.{salt}"


def verify_password(password: str, stored: str) -> bool:
    """Check a plain password against a stored ``hash.salt`` string.

    Malformed stored values never match.
    """
    hashed, sep, salt = stored.partition(".")
    if not sep or not hashed or not salt:
        return False
    try:
        expected = bytes.fromhex(hashed)
    except ValueError:
        return False
    return hmac.compare_digest(_scrypt(password, salt), expected)
