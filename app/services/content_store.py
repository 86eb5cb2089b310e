"""Read-only client for the hosted content store (Supabase REST)."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from app.config import Settings
from app.services.share_preview.errors import (
    ConfigurationError,
    ContentDecodeError,
    UpstreamError,
)
from app.services.share_preview.kinds import EntityKind
from app.services.share_preview.render_models import LookupFilter, ShareableContent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentStoreConfig:
    """Validated connection settings for the content store."""

    base_url: str
    api_key: str
    bearer_token: str
    timeout_seconds: float = 5.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "ContentStoreConfig":
        """Build the config, failing fast when anything is missing.

        Raises:
            ConfigurationError: If the URL, API key or bearer token is unset.
                The message names the missing settings, never their values.
        """
        base_url = (settings.supabase_url or "").strip()
        api_key = (settings.supabase_anon_key or "").strip()
        bearer_token = (settings.supabase_bearer_token or api_key).strip()

        missing = [
            name
            for name, value in (
                ("SUPABASE_URL", base_url),
                ("SUPABASE_ANON_KEY", api_key),
                ("SUPABASE_BEARER_TOKEN", bearer_token),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Content store not configured; missing: {', '.join(missing)}"
            )

        return cls(
            base_url=base_url.rstrip("/"),
            api_key=api_key,
            bearer_token=bearer_token,
            timeout_seconds=settings.share_fetch_timeout_seconds,
        )


class ContentStoreClient:
    """Fetches single rows for share previews.

    One GET per call, no retries. The underlying ``httpx.AsyncClient`` is
    shared across requests and closed via :meth:`aclose`.
    """

    def __init__(
        self,
        config: ContentStoreConfig,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(config.timeout_seconds),
        )

    @property
    def headers(self) -> dict[str, str]:
        return {
            "apikey": self.config.api_key,
            "Authorization": f"Bearer {self.config.bearer_token}",
            "Accept": "application/json",
        }

    def build_url(self, lookup: LookupFilter, kind: EntityKind) -> str:
        """Full REST URL with projection, filter and ``limit=1``.

        The filter is already percent-encoded, so the query string is built
        by hand rather than through ``params=``.
        """
        select = ",".join(kind.select)
        return (
            f"{self.config.base_url}/rest/v1/{kind.table}"
            f"?select={select}&{lookup.as_query()}&limit=1"
        )

    async def fetch(
        self,
        lookup: LookupFilter,
        kind: EntityKind,
    ) -> Optional[ShareableContent]:
        """Fetch the row matching ``lookup``.

        Args:
            lookup: Identity or slug filter
            kind: Table descriptor (projection and row model)

        Returns:
            ShareableContent, or None when the store returned no rows

        Raises:
            UpstreamError: Non-2xx status, timeout or transport failure
            ContentDecodeError: Body is not a list of rows of the expected shape
        """
        url = self.build_url(lookup, kind)
        try:
            response = await self._client.get(url, headers=self.headers)
        except httpx.TimeoutException as exc:
            raise UpstreamError(f"Content store timed out for {kind.table}") from exc
        except httpx.RequestError as exc:
            raise UpstreamError(
                f"Content store request failed for {kind.table}: {exc}"
            ) from exc

        if not response.is_success:
            raise UpstreamError(
                f"Content store returned {response.status_code} for {kind.table}",
                status_code=response.status_code,
            )

        rows = self._decode_rows(response, kind)
        if not rows:
            return None

        try:
            row = kind.row_model.model_validate(rows[0])
        except ValidationError as exc:
            raise ContentDecodeError(
                f"Unexpected {kind.table} row shape: {exc.error_count()} error(s)"
            ) from exc
        return kind.content_from_row(row)

    @staticmethod
    def _decode_rows(response: httpx.Response, kind: EntityKind) -> list[Any]:
        try:
            payload = response.json()
        except ValueError as exc:
            raise ContentDecodeError(
                f"Content store returned invalid JSON for {kind.table}"
            ) from exc
        if not isinstance(payload, list):
            raise ContentDecodeError(
                f"Expected a JSON array from {kind.table}, got {type(payload).__name__}"
            )
        return payload

    async def aclose(self) -> None:
        await self._client.aclose()
