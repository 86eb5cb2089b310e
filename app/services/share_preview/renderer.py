"""Render share preview responses (metadata pages, redirects, errors)."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from jinja2 import Environment, FileSystemLoader, StrictUndefined
from markupsafe import Markup

from app.config import Settings
from app.services.share_preview.errors import (
    ConfigurationError,
    ContentDecodeError,
    MalformedTimestampError,
    MissingKeyError,
    NotFoundError,
    UpstreamError,
)
from app.services.share_preview.headers import (
    HTML_CONTENT_TYPE,
    TEXT_CONTENT_TYPE,
    bot_cache_headers,
    no_store_headers,
    share_headers,
)
from app.services.share_preview.kinds import EntityKind, StaticShareTarget
from app.services.share_preview.render_models import (
    Classification,
    RedirectStrategy,
    RenderedPreview,
    RequestContext,
    ShareableContent,
    encode_uri_component,
)
from app.services.share_preview.text import (
    build_description,
    escape_html,
    format_published_time,
)

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"


def _finalize(value: object) -> object:
    # Every {{ expression }} goes through escape_html unless pre-marked safe
    if isinstance(value, Markup):
        return value
    return escape_html(value)


def build_template_env(directory: Path = TEMPLATES_DIR) -> Environment:
    """Jinja environment whose output escaping is ``escape_html``."""
    return Environment(
        loader=FileSystemLoader(str(directory)),
        autoescape=False,
        finalize=_finalize,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )


def _script_string(value: str) -> Markup:
    """JSON string literal that is safe inside a <script> element."""
    literal = (
        json.dumps(value)
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
    )
    return Markup(literal)


@dataclass(frozen=True)
class PreviewPage:
    """Fields interpolated into the metadata template."""

    title: str
    description: str
    og_type: str
    og_url: str
    canonical_url: str
    human_url: str
    image_url: str
    link_text: str
    image_dimensions: Optional[Tuple[int, int]] = None
    published_time: Optional[str] = None


class PreviewRenderer:
    """Turn fetched content (or a failure) into a RenderedPreview."""

    def __init__(
        self,
        site_name: str = "Fundación Evolución Antoniana",
        locale: str = "es_AR",
        description_max_length: int = 180,
        redirect_strategy: RedirectStrategy = RedirectStrategy.status,
        bot_max_age: int = 600,
        bot_stale_while_revalidate: int = 86400,
        env: Optional[Environment] = None,
    ) -> None:
        self.site_name = site_name
        self.locale = locale
        self.lang = locale.split("_")[0]
        self.description_max_length = description_max_length
        self.redirect_strategy = redirect_strategy
        self.bot_max_age = bot_max_age
        self.bot_stale_while_revalidate = bot_stale_while_revalidate
        self.env = env or build_template_env()

    @classmethod
    def from_settings(cls, settings: Settings) -> "PreviewRenderer":
        return cls(
            site_name=settings.share_site_name,
            locale=settings.share_locale,
            description_max_length=settings.share_description_max_length,
            redirect_strategy=RedirectStrategy(settings.share_redirect_strategy),
            bot_max_age=settings.share_bot_max_age,
            bot_stale_while_revalidate=settings.share_bot_stale_while_revalidate,
        )

    # ------------------------------------------------------------------
    # Page models
    # ------------------------------------------------------------------

    def canonical_url(
        self, content: ShareableContent, kind: EntityKind, ctx: RequestContext
    ) -> str:
        """Human-facing URL, e.g. ``https://host/novedades/mi-noticia``."""
        return (
            f"{ctx.origin}/{kind.canonical_segment}/"
            f"{encode_uri_component(content.key)}"
        )

    def build_page(
        self, content: ShareableContent, kind: EntityKind, ctx: RequestContext
    ) -> PreviewPage:
        title = (content.title or "").strip()
        title = kind.title_template.format(title=title) if title else kind.default_title

        human_url = self.canonical_url(content, kind, ctx)
        image = ctx.absolute(content.image_url or kind.default_image)

        published_time = None
        if kind.publishes_time and content.created_at:
            try:
                published_time = format_published_time(content.created_at)
            except MalformedTimestampError as exc:
                logger.warning(
                    f"Omitting published_time for {kind.name} '{content.key}': {exc}"
                )

        return PreviewPage(
            title=title,
            description=build_description(
                content.body,
                self.description_max_length,
                fallback=kind.default_description,
            ),
            og_type=kind.og_type,
            og_url=human_url,
            canonical_url=human_url,
            human_url=human_url,
            image_url=image,
            link_text=kind.link_text,
            image_dimensions=kind.image_dimensions,
            published_time=published_time,
        )

    def build_static_page(
        self, target: StaticShareTarget, ctx: RequestContext
    ) -> PreviewPage:
        share_url = ctx.absolute(target.share_path)
        return PreviewPage(
            title=target.title,
            description=build_description(
                target.description, self.description_max_length
            ),
            og_type="website",
            og_url=share_url,
            canonical_url=share_url,
            human_url=ctx.absolute(target.human_path),
            image_url=ctx.absolute(target.image),
            link_text="Continuar",
            image_dimensions=target.image_dimensions,
        )

    # ------------------------------------------------------------------
    # Responses
    # ------------------------------------------------------------------

    def render_content(
        self,
        content: ShareableContent,
        kind: EntityKind,
        ctx: RequestContext,
        classification: Classification,
    ) -> RenderedPreview:
        """Metadata page for crawlers, redirect for humans."""
        return self.render_page(self.build_page(content, kind, ctx), classification)

    def render_static(
        self,
        target: StaticShareTarget,
        ctx: RequestContext,
        classification: Classification,
    ) -> RenderedPreview:
        """Refresh document with no-store headers, whoever is asking."""
        page = self.build_static_page(target, ctx)
        logger.debug(f"Static share {target.name} for {classification.value}")
        return self._metadata_response(
            page, no_store_headers(), redirect_script=_script_string(page.human_url)
        )

    def render_page(
        self, page: PreviewPage, classification: Classification
    ) -> RenderedPreview:
        if classification is Classification.bot:
            return self._metadata_response(
                page,
                bot_cache_headers(self.bot_max_age, self.bot_stale_while_revalidate),
            )

        if self.redirect_strategy is RedirectStrategy.refresh:
            return self._metadata_response(
                page, no_store_headers(), redirect_script=_script_string(page.human_url)
            )

        html = self.env.get_template("share/redirect.html").render(
            lang=self.lang,
            url=page.human_url,
            link_text=page.link_text,
        )
        headers = share_headers(no_store_headers())
        headers["Content-Type"] = HTML_CONTENT_TYPE
        headers["Location"] = page.human_url
        return RenderedPreview(html=html, status_code=302, headers=headers)

    def _metadata_response(
        self,
        page: PreviewPage,
        cache_headers: dict[str, str],
        redirect_script: Optional[Markup] = None,
    ) -> RenderedPreview:
        html = self.env.get_template("share/metadata.html").render(
            lang=self.lang,
            site_name=self.site_name,
            locale=self.locale,
            page=page,
            redirect_script=redirect_script,
        )
        headers = share_headers(cache_headers)
        headers["Content-Type"] = HTML_CONTENT_TYPE
        return RenderedPreview(html=html, status_code=200, headers=headers)

    def render_error(self, exc: Exception) -> RenderedPreview:
        """Plain-text response for a failed share request."""
        status_code, body = error_status(exc)
        headers = no_store_headers()
        headers["Content-Type"] = TEXT_CONTENT_TYPE
        return RenderedPreview(html=body, status_code=status_code, headers=headers)


def error_status(exc: Exception) -> Tuple[int, str]:
    """Map a pipeline failure to its status code and client-facing text."""
    if isinstance(exc, MissingKeyError):
        return 400, "Missing slug parameter (?slug=...)"
    if isinstance(exc, NotFoundError):
        return 404, "Not found"
    if isinstance(exc, ConfigurationError):
        return 500, "Content store not configured"
    if isinstance(exc, UpstreamError):
        status = exc.status_code
        if status is None or not 400 <= status <= 599:
            status = 500
        return status, "Upstream error"
    if isinstance(exc, ContentDecodeError):
        return 500, "Upstream error"
    return 500, "Internal error"
