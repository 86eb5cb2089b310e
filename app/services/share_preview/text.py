"""Text helpers for share preview documents."""

import re
from datetime import datetime, timezone

from app.services.share_preview.errors import MalformedTimestampError

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


def escape_html(value: object) -> str:
    """Escape a value for use in HTML text or a quoted attribute."""
    if value is None:
        return ""
    return (
        str(value)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def strip_to_one_line(text: str | None) -> str:
    """Drop markup and collapse all whitespace runs to single spaces."""
    if not text:
        return ""
    without_tags = _TAG_RE.sub(" ", text)
    return _WHITESPACE_RE.sub(" ", without_tags).strip()


def build_description(body: str | None, max_length: int, fallback: str = "") -> str:
    """Plain-text description of at most ``max_length`` characters.

    The cut may fall mid-word.
    """
    description = strip_to_one_line(body)[:max_length]
    # Trailing space left by a mid-sentence cut
    description = description.rstrip()
    return description or fallback[:max_length]


def format_published_time(raw: str) -> str:
    """Normalize a stored timestamp to a UTC ISO-8601 instant.

    Naive timestamps are taken as UTC. Output matches JavaScript's
    ``Date.toISOString()``: ``2024-05-01T12:30:00.000Z``.

    Raises:
        MalformedTimestampError: If ``raw`` is not an ISO-8601 timestamp
    """
    value = (raw or "").strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise MalformedTimestampError(f"Unparseable timestamp: {raw!r}") from exc

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    parsed = parsed.astimezone(timezone.utc)
    millis = parsed.microsecond // 1000
    return parsed.strftime("%Y-%m-%dT%H:%M:%S") + f".{millis:03d}Z"
