"""Descriptors for the content kinds that can be shared.

Each descriptor carries everything that differs between news and partner
previews (table, projection, canonical path, defaults) so a single pipeline
can serve both.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Type

from app.models.content import NewsRow, PartnerRow, StoreRow
from app.services.share_preview.render_models import ShareableContent


@dataclass(frozen=True)
class EntityKind:
    """Static description of one shareable table."""

    name: str
    table: str
    select: Tuple[str, ...]
    canonical_segment: str  # SPA route, e.g. /novedades/{slug}
    og_type: str
    default_title: str
    default_description: str
    default_image: str
    link_text: str
    row_model: Type[StoreRow]
    to_content: Callable[..., ShareableContent]
    title_template: str = "{title}"
    image_dimensions: Optional[Tuple[int, int]] = None
    publishes_time: bool = False

    def content_from_row(self, row: StoreRow) -> ShareableContent:
        return self.to_content(row)


@dataclass(frozen=True)
class StaticShareTarget:
    """Share page for an SPA route that has no backing row."""

    name: str
    human_path: str
    share_path: str
    title: str
    description: str
    image: str
    image_dimensions: Optional[Tuple[int, int]] = (1200, 630)


def _news_content(row: NewsRow) -> ShareableContent:
    return ShareableContent(
        id=row.id,
        slug=row.slug,
        title=row.title,
        body=row.content,
        image_url=row.image_url,
        created_at=row.created_at,
    )


def _partner_content(row: PartnerRow) -> ShareableContent:
    return ShareableContent(
        id=row.id,
        slug=row.slug,
        title=row.nombre,
        body=row.descripcion,
        image_url=row.logo_url,
        created_at=row.created_at,
    )


NEWS = EntityKind(
    name="news",
    table="news",
    select=("id", "title", "content", "image_url", "created_at", "slug"),
    canonical_segment="novedades",
    og_type="article",
    default_title="Novedad",
    default_description="",
    default_image="/og-default.png",
    link_text="Abrir noticia",
    row_model=NewsRow,
    to_content=_news_content,
    image_dimensions=(1200, 630),
    publishes_time=True,
)

PARTNER = EntityKind(
    name="partner",
    table="partners",
    select=("id", "nombre", "descripcion", "logo_url", "created_at", "slug"),
    canonical_segment="partners",
    og_type="website",
    default_title="Marca Aliada – Fundación Evolución Antoniana",
    default_description="Conoce nuestras marcas aliadas y sus beneficios.",
    default_image="/favicon-512.png",
    link_text="Ver marca aliada",
    row_model=PartnerRow,
    to_content=_partner_content,
    title_template="{title} – Marca Aliada",
)

PREINSCRIPCION = StaticShareTarget(
    name="preinscripcion",
    human_path="/preinscripcion",
    share_path="/api/share/preinscripcion",
    title=(
        "Preinscripción | Educación Permanente (EPJA) – "
        "Fundación Evolución Antoniana"
    ),
    description=(
        "Iniciá o finalizá tus estudios en el Centro Juventud Antoniana. "
        "Preinscribite en el programa de Educación Permanente para Jóvenes "
        "y Adultos."
    ),
    image="/img/og-image-1200x630.png",
)
