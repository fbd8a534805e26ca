"""Utilities for hashing and audit metadata."""

import hashlib
import json
from datetime import datetime, timezone


def hash_text(text: str) -> str:
    """Compute SHA256 hash of text. Deterministic."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def hash_document(document: dict) -> str:
    """SHA256 of canonical (sorted-key) JSON, so key order never changes the hash."""
    return hash_text(json.dumps(document, sort_keys=True, ensure_ascii=False))


def iso_now() -> str:
    """Current UTC timestamp as ISO string."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
