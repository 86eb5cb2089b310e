"""Exception hierarchy for the share preview pipeline."""

from typing import Optional


class SharePreviewError(Exception):
    """Base class for failures handled at the share route boundary."""


class MissingKeyError(SharePreviewError):
    """No content key was supplied with the request."""


class ConfigurationError(SharePreviewError):
    """Content store URL or credentials are not configured."""


class NotFoundError(SharePreviewError):
    """The content store returned no row for the lookup."""


class UpstreamError(SharePreviewError):
    """The content store answered with a non-success status or not at all.

    ``status_code`` mirrors the store's HTTP status; it is ``None`` for
    timeouts and transport failures.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ContentDecodeError(SharePreviewError):
    """A store response did not match the expected row projection."""


class MalformedTimestampError(SharePreviewError):
    """A stored creation timestamp could not be parsed."""
