"""Pydantic projections of content store rows used by share previews."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class StoreRow(BaseModel):
    """Common identity columns selected for every shareable table."""

    model_config = ConfigDict(extra="ignore")

    id: str
    slug: Optional[str] = None
    created_at: Optional[str] = None  # parsed at render time

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        # Older tables use integer identities
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("slug", mode="before")
    @classmethod
    def _blank_slug_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class NewsRow(StoreRow):
    """Row of the ``news`` table."""

    title: Optional[str] = None
    content: Optional[str] = None
    image_url: Optional[str] = None


class PartnerRow(StoreRow):
    """Row of the ``partners`` table ("marcas aliadas")."""

    nombre: Optional[str] = None
    descripcion: Optional[str] = None
    logo_url: Optional[str] = None
