# app/config.py
from typing import Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = "INFO"
    access_log: bool = True

    # Content store (Supabase REST). SUPABASE_* wins over the VITE_* names
    # shared with the frontend build.
    supabase_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("SUPABASE_URL", "VITE_SUPABASE_URL"),
    )
    supabase_anon_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("SUPABASE_ANON_KEY", "VITE_SUPABASE_ANON_KEY"),
    )
    # Defaults to the anon key when unset
    supabase_bearer_token: Optional[str] = None

    # Share preview settings
    share_redirect_strategy: Literal["status", "refresh"] = "status"
    share_fetch_timeout_seconds: float = 5.0
    share_description_max_length: int = 180
    share_site_name: str = "Fundación Evolución Antoniana"
    share_locale: str = "es_AR"
    share_bot_max_age: int = 600
    share_bot_stale_while_revalidate: int = 86400

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


settings = Settings()
