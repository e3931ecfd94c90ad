"""Password digest used for duplicate detection."""

from __future__ import annotations

import hashlib

HEX_DIGEST_LENGTH = 64


def password_hexdigest(password: str) -> str:
    """Return the SHA-256 hex digest of the password's UTF-8 bytes.

    The digest is unsalted on purpose: two users choosing the same password
    must produce the same value, which is how duplicates are found.
    """
    return hashlib.sha256(password.encode("utf-8", errors="surrogatepass")).hexdigest()
