"""Share routes for social previews (Open Graph / Twitter cards).

Crawlers get a metadata document; people are sent on to the SPA page.
Each content kind accepts its key as a path segment or as ``?slug=``.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Query, Request
from starlette.responses import Response

from app.services.content_store import ContentStoreClient
from app.services.share_preview.bots import classify_user_agent
from app.services.share_preview.errors import (
    ConfigurationError,
    ContentDecodeError,
    MissingKeyError,
    NotFoundError,
    SharePreviewError,
    UpstreamError,
)
from app.services.share_preview.kinds import NEWS, PARTNER, PREINSCRIPCION, EntityKind
from app.services.share_preview.lookup import resolve_lookup
from app.services.share_preview.render_models import RenderedPreview, RequestContext
from app.services.share_preview.renderer import PreviewRenderer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/share", tags=["share"])

_METHODS = ["GET", "HEAD"]
_SCHEMES = ("http", "https")


def _first_value(header: Optional[str]) -> str:
    return (header or "").split(",")[0].strip()


def build_request_context(request: Request, raw_key: Optional[str] = None) -> RequestContext:
    """Resolve host and scheme as seen by the client, behind proxies too."""
    host = (
        _first_value(request.headers.get("x-forwarded-host"))
        or _first_value(request.headers.get("host"))
        or request.url.netloc
    )
    scheme = _first_value(request.headers.get("x-forwarded-proto")).lower()
    if scheme not in _SCHEMES:
        scheme = request.url.scheme
    return RequestContext(
        host=host,
        scheme=scheme,
        user_agent=request.headers.get("user-agent", ""),
        requested_key=(raw_key or "").strip(),
    )


def get_renderer(request: Request) -> PreviewRenderer:
    return request.app.state.share_renderer


def get_content_store(request: Request) -> ContentStoreClient:
    """Return the store client built at startup.

    Raises:
        ConfigurationError: If startup could not build the client
    """
    store = getattr(request.app.state, "content_store", None)
    if store is None:
        error = getattr(request.app.state, "content_store_error", None)
        raise error or ConfigurationError("Content store not configured")
    return store


def to_response(preview: RenderedPreview, method: str) -> Response:
    """Serialize a preview; HEAD keeps the headers and drops the body."""
    headers = dict(preview.headers)
    if method == "HEAD":
        headers.pop("Location", None)
        # Advertise the length GET would send
        headers["Content-Length"] = str(len(preview.html.encode("utf-8")))
        status_code = 200 if preview.status_code < 400 else preview.status_code
        return Response(content=b"", status_code=status_code, headers=headers)
    return Response(
        content=preview.html,
        status_code=preview.status_code,
        headers=headers,
    )


def _log_failure(handler: str, key: str, exc: SharePreviewError) -> None:
    if isinstance(exc, NotFoundError):
        logger.info(f"{handler}: no content for key '{key}'")
    elif isinstance(exc, MissingKeyError):
        logger.info(f"{handler}: request without a key")
    elif isinstance(exc, ConfigurationError):
        logger.error(f"{handler}: {exc}")
    elif isinstance(exc, UpstreamError):
        logger.warning(
            f"{handler}: upstream failure for key '{key}' "
            f"(status={exc.status_code}): {exc}"
        )
    elif isinstance(exc, ContentDecodeError):
        logger.error(f"{handler}: undecodable content for key '{key}': {exc}")
    else:
        logger.error(f"{handler}: {exc}")


async def share_entity(
    request: Request,
    kind: EntityKind,
    raw_key: Optional[str],
) -> Response:
    """Run the preview pipeline for one content kind."""
    handler = f"share_{kind.name}"
    ctx = build_request_context(request, raw_key)
    renderer = get_renderer(request)

    try:
        lookup = resolve_lookup(raw_key)
        store = get_content_store(request)
        content = await store.fetch(lookup, kind)
        if content is None:
            raise NotFoundError(f"No {kind.name} for key '{ctx.requested_key}'")
        classification = classify_user_agent(ctx.user_agent)
        preview = renderer.render_content(content, kind, ctx, classification)
    except SharePreviewError as exc:
        _log_failure(handler, ctx.requested_key, exc)
        preview = renderer.render_error(exc)
    except Exception as exc:
        logger.exception(f"{handler}: unexpected error for key '{ctx.requested_key}'")
        preview = renderer.render_error(exc)

    return to_response(preview, request.method)


@router.api_route("/news", methods=_METHODS)
async def share_news_by_query(
    request: Request,
    slug: Optional[str] = Query(default=None),
) -> Response:
    """News preview with the key in ``?slug=``."""
    return await share_entity(request, NEWS, slug)


@router.api_route("/news/{key}", methods=_METHODS)
async def share_news(request: Request, key: str) -> Response:
    """News preview with the key as the last path segment."""
    return await share_entity(request, NEWS, key)


@router.api_route("/partners", methods=_METHODS)
async def share_partner_by_query(
    request: Request,
    slug: Optional[str] = Query(default=None),
) -> Response:
    return await share_entity(request, PARTNER, slug)


@router.api_route("/partners/{key}", methods=_METHODS)
async def share_partner(request: Request, key: str) -> Response:
    return await share_entity(request, PARTNER, key)


@router.api_route("/preinscripcion", methods=_METHODS)
async def share_preinscripcion(request: Request) -> Response:
    """Static preview for the EPJA pre-enrollment page."""
    ctx = build_request_context(request)
    renderer = get_renderer(request)
    try:
        preview = renderer.render_static(
            PREINSCRIPCION, ctx, classify_user_agent(ctx.user_agent)
        )
    except Exception as exc:
        logger.exception("share_preinscripcion: unexpected error")
        preview = renderer.render_error(exc)
    return to_response(preview, request.method)
