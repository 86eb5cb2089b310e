"""Resolve a share key into a content store lookup filter."""

import re

from app.services.share_preview.errors import MissingKeyError
from app.services.share_preview.render_models import LookupFilter

# RFC 4122 textual form: version 1-5, variant 8/9/a/b
_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def is_uuid(value: str) -> bool:
    """Return True if ``value`` is a canonical RFC 4122 UUID string."""
    return bool(_UUID_RE.match(value or ""))


def resolve_lookup(raw_key: str | None) -> LookupFilter:
    """Build the identity or slug filter for a share key.

    Args:
        raw_key: Slug or UUID taken from the path or the ``slug`` query param

    Returns:
        LookupFilter on ``id`` for UUIDs, on ``slug`` otherwise

    Raises:
        MissingKeyError: If the key is empty or blank
    """
    key = (raw_key or "").strip()
    if not key:
        raise MissingKeyError("Missing slug parameter")

    if is_uuid(key):
        return LookupFilter(column="id", value=key)
    return LookupFilter(column="slug", value=key)
