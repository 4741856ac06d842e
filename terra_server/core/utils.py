# terra_server/core/utils.py

import re
from datetime import datetime, timezone
from uuid import UUID, uuid4

from terra_server.core.exceptions import BadRequestError

_INVALID_SLUG_CHARS = re.compile(r"[^a-z0-9-]+")
_REPEATED_DASHES = re.compile(r"-+")


def utcnow() -> datetime:
    # naive UTC, same representation stored in every DateTime column
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    return str(uuid4())


def ensure_uuid(value: str, *, label: str) -> str:
    try:
        UUID(str(value))
    except (TypeError, ValueError) as e:
        raise BadRequestError(f"Invalid {label} ID format") from e
    return str(value)


def generate_slug(title: str) -> str:
    slug = title.lower().replace(" ", "-")
    slug = _INVALID_SLUG_CHARS.sub("", slug)
    slug = _REPEATED_DASHES.sub("-", slug)
    return slug.strip("-")


def with_slug_suffix(slug: str) -> str:
    return f"{slug}-{uuid4().hex[:8]}"


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def require_text(value: str | None, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise BadRequestError(f"{field} cannot be empty")
    return value
