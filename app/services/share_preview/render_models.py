"""Value objects passed through the share preview pipeline."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional
from urllib.parse import quote


# encodeURIComponent leaves these unescaped; links built elsewhere on the
# site use the same form
URI_COMPONENT_SAFE = "!~*'()"


def encode_uri_component(value: str) -> str:
    """Percent-encode a single path or query component."""
    return quote(value, safe=URI_COMPONENT_SAFE)


class Classification(str, Enum):
    """Who is asking for the share URL."""

    bot = "bot"
    human = "human"


class RedirectStrategy(str, Enum):
    """How human visitors are sent on to the canonical page."""

    status = "status"  # HTTP 302 with a tiny fallback document
    refresh = "refresh"  # HTTP 200 with script + meta refresh


@dataclass(frozen=True)
class LookupFilter:
    """Equality filter on either the identity or the slug column."""

    column: str  # "id" or "slug"
    value: str

    def as_query(self) -> str:
        """PostgREST filter fragment, e.g. ``slug=eq.mi-noticia``."""
        return f"{self.column}=eq.{encode_uri_component(self.value)}"


@dataclass(frozen=True)
class ShareableContent:
    """Display fields of a news article or partner, normalized across tables."""

    id: str
    slug: Optional[str] = None
    title: Optional[str] = None
    body: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[str] = None

    @property
    def key(self) -> str:
        """Slug when present, identity otherwise."""
        return self.slug or self.id


@dataclass(frozen=True)
class RequestContext:
    """Per-request facts needed to build absolute URLs and classify."""

    host: str
    scheme: str
    user_agent: str
    requested_key: str = ""

    @property
    def origin(self) -> str:
        return f"{self.scheme}://{self.host}"

    def absolute(self, path_or_url: str) -> str:
        """Make a site-relative path absolute; absolute URLs pass through."""
        if path_or_url.lower().startswith(("http://", "https://")):
            return path_or_url
        return f"{self.origin}/{path_or_url.lstrip('/')}"


@dataclass(frozen=True)
class RenderedPreview:
    """Final response document, serialized as-is by the route."""

    html: str
    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
