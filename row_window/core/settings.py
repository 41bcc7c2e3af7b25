"""Environment-driven settings via pydantic-settings.

Every field can be overridden with a ``ROW_WINDOW_`` prefixed environment
variable or a ``.env`` file. ``get_settings()`` is cached, one instance per
process.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the order pagination engine."""

    model_config = SettingsConfigDict(
        env_prefix="ROW_WINDOW_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Schema owning WEB_ORDENES and its child tables; empty for none
    order_schema: str | None = "INTRANET"

    default_page_size: int = 10

    # Oracle rejects IN lists longer than 1000 expressions
    in_list_chunk_size: int = 1000

    log_level: str = "INFO"

    @field_validator("order_schema", mode="before")
    @classmethod
    def blank_schema_is_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("default_page_size", "in_list_chunk_size")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be a positive integer")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured log level to the ``row_window`` logger tree."""
    settings = settings or get_settings()
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("row_window").setLevel(settings.log_level.upper())
