"""Pytest fixtures for the share preview service.

The content store is replaced by an ``httpx.MockTransport`` so no test
talks to a real Supabase project.
"""

import json
from dataclasses import dataclass, field
from typing import Any, AsyncGenerator, Callable

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.services.content_store import ContentStoreClient, ContentStoreConfig
from app.services.share_preview.render_models import RedirectStrategy
from app.services.share_preview.renderer import PreviewRenderer

STORE_URL = "https://store.example.supabase.co"

FACEBOOK_UA = "facebookexternalhit/1.1 (+http://www.facebook.com/externalhit_uatext.php)"
IPHONE_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)


@dataclass
class FakeStore:
    """Records outbound requests and answers with canned rows."""

    rows: list[Any] = field(default_factory=list)
    status_code: int = 200
    raw_body: bytes | None = None
    error: Exception | None = None
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)
        return httpx.Response(
            self.status_code,
            content=json.dumps(self.rows).encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )


@pytest.fixture
def store_config() -> ContentStoreConfig:
    """Config pointing at a fake Supabase project."""
    return ContentStoreConfig(
        base_url=STORE_URL,
        api_key="anon-key",
        bearer_token="anon-key",
        timeout_seconds=2.0,
    )


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest_asyncio.fixture
async def content_store(
    store_config: ContentStoreConfig, fake_store: FakeStore
) -> AsyncGenerator[ContentStoreClient, None]:
    """ContentStoreClient wired to the fake store."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake_store.handler))
    client = ContentStoreClient(store_config, http_client=http_client)
    try:
        yield client
    finally:
        await client.aclose()


@pytest.fixture
def renderer() -> PreviewRenderer:
    return PreviewRenderer()


@pytest.fixture
def news_row() -> dict[str, Any]:
    """A typical row of the ``news`` table."""
    return {
        "id": "a1b2c3d4-e5f6-4789-8abc-1234567890ab",
        "slug": "mi-noticia-2024",
        "title": "Jornada solidaria",
        "content": "<p>Gran   jornada</p>\n<p>en el club.</p>",
        "image_url": "https://cdn.example.com/jornada.jpg",
        "created_at": "2024-05-01T12:30:00.123456+00:00",
    }


@pytest.fixture
def partner_row() -> dict[str, Any]:
    """A typical row of the ``partners`` table."""
    return {
        "id": "7",
        "slug": "cafe-norte",
        "nombre": "Café Norte",
        "descripcion": "10% de descuento para socios.",
        "logo_url": "/img/partners/cafe-norte.png",
        "created_at": "2024-02-10T09:00:00Z",
    }


@pytest.fixture
def configure_app() -> Callable[..., Any]:
    """Install renderer and store on ``app.state``.

    ASGITransport does not run the lifespan hook, so tests set the state
    the hook would have set.
    """
    from app.main import app

    def _configure(
        store: ContentStoreClient | None,
        strategy: RedirectStrategy = RedirectStrategy.status,
        store_error: Exception | None = None,
    ):
        app.state.share_renderer = PreviewRenderer(redirect_strategy=strategy)
        app.state.content_store = store
        app.state.content_store_error = store_error
        return app

    return _configure


@pytest_asyncio.fixture
async def app_client(
    configure_app: Callable[..., Any],
    content_store: ContentStoreClient,
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the app with the fake content store installed."""
    app = configure_app(content_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="https://fundacion.test") as client:
        yield client

