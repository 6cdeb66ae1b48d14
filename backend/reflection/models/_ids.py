import uuid
from datetime import datetime, timezone


def new_id() -> str:
    """Opaque 32-char hex id."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
