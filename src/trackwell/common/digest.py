"""Opaque attestation digests for off-system documents."""

import hashlib

DIGEST_HEX_LENGTH = 64


def digest_text(text: str) -> str:
    """SHA-256 hex digest of a UTF-8 string."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
