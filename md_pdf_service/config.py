"""
Markdown PDF Service Configuration Module

Centralized configuration with Pydantic validation. Every default matches the
service's fixed behavior (listen on 0.0.0.0:8080, wkhtmltopdf from PATH,
styled A4 template, unrestricted CORS); environment variables only exist so
deployments can override them.
"""

import logging
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

DOCUMENT_STYLES = ("styled", "plain")


class ServiceSettings(BaseSettings):
    """
    Service configuration with validation.

    All settings can be overridden via environment variables.
    Validation happens at startup to fail fast on misconfiguration.
    """

    # === Listener ===
    host: str = Field(default="0.0.0.0", description="Interface to bind")
    port: int = Field(default=8080, ge=1, le=65535, description="TCP port to bind")

    # === Rendering ===
    wkhtmltopdf_path: str = Field(
        default="wkhtmltopdf",
        min_length=1,
        description="wkhtmltopdf executable name or path (resolved via PATH)"
    )
    scratch_dir: Optional[str] = Field(
        default=None,
        description="Directory for temporary HTML/PDF files (system temp dir if unset)"
    )
    document_style: str = Field(
        default="styled",
        description="HTML template variant: 'styled' or 'plain'"
    )
    render_timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Kill wkhtmltopdf after this many seconds (no limit if unset)"
    )

    # === CORS ===
    cors_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins ('*' for any)"
    )

    # === Logging ===
    log_level: str = Field(default="INFO", description="Root logging level")

    @field_validator("document_style")
    @classmethod
    def validate_document_style(cls, v: str) -> str:
        """Validate the template variant is a known value."""
        v_lower = v.lower()
        if v_lower not in DOCUMENT_STYLES:
            raise ValueError(f"document_style must be one of: {', '.join(DOCUMENT_STYLES)}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate the log level is one the logging module knows."""
        v_upper = v.upper()
        if not isinstance(logging.getLevelName(v_upper), int):
            raise ValueError(f"Unknown log level: {v}")
        return v_upper

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    class Config:
        env_prefix = ""  # No prefix, use exact env var names
        case_sensitive = False  # WKHTMLTOPDF_PATH = wkhtmltopdf_path


@lru_cache()
def get_settings() -> ServiceSettings:
    """
    Get cached settings instance.

    Settings are loaded once and cached for the life of the process.
    """
    return ServiceSettings()
