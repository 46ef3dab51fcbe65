"""Identity utilities for records and credentials.

- new_record_id: opaque identifier for dogs, sessions and users
- hash_password / verify_password: salted PBKDF2-SHA256 password hashes
- new_access_token: opaque bearer token for a signed-in user
"""

import hashlib
import hmac
import secrets
import uuid

# PBKDF2 parameters
PBKDF2_ALGORITHM = "sha256"
PBKDF2_ITERATIONS = 200_000
SALT_BYTES = 16

# Stored hash format: "pbkdf2_sha256$<iterations>$<salt hex>$<digest hex>"
HASH_SCHEME = "pbkdf2_sha256"


def new_record_id() -> str:
    """Generate an opaque record identifier.

    Returns:
        uuid4 string.
    """
    return str(uuid.uuid4())


def new_access_token() -> str:
    """Generate an opaque, URL-safe bearer token."""
    return secrets.token_urlsafe(32)


def hash_password(password: str, iterations: int = PBKDF2_ITERATIONS) -> str:
    """Hash a password with a random salt.

    Args:
        password: Plain-text password.
        iterations: PBKDF2 iteration count.

    Returns:
        Encoded hash string that embeds scheme, iterations and salt.
    """
    salt = secrets.token_bytes(SALT_BYTES)
    digest = hashlib.pbkdf2_hmac(PBKDF2_ALGORITHM, password.encode("utf-8"), salt, iterations)
    return f"{HASH_SCHEME}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    """Check a password against an encoded hash.

    Malformed encoded hashes never verify.

    Args:
        password: Plain-text password to check.
        encoded: Value produced by hash_password().

    Returns:
        True if the password matches.
    """
    try:
        scheme, iterations_str, salt_hex, digest_hex = encoded.split("$")
        iterations = int(iterations_str)
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(digest_hex)
    except ValueError:
        return False

    if scheme != HASH_SCHEME:
        return False

    got = hashlib.pbkdf2_hmac(PBKDF2_ALGORITHM, password.encode("utf-8"), salt, iterations)
    return hmac.compare_digest(expected, got)
