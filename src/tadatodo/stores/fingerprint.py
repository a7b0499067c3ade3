"""Content fingerprints for change detection."""

import hashlib


def generate_hash(content: str) -> str:
    """Return the SHA-256 hex digest of the UTF-8 encoded content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def hashes_match(recorded: str | None, current: str) -> bool:
    """A missing recorded hash never matches."""
    return recorded == current
