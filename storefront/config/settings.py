"""
==============================================================================
Application Settings Module
==============================================================================

Configuration management using Pydantic Settings.

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

Catalog Backends:
----------------
- cms:  query the headless content service (Sanity) over HTTP
- file: read a local JSON array of product records

==============================================================================
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Display name for the application
        app_env: Environment mode (development/staging/production)
        debug: Enable debug mode for verbose logging
        host: Server bind address
        port: Server port number
        cors_origins: Allowed CORS origins (JSON array string)
        catalog_backend: Where products come from ("cms" or "file")
        products_file: Path to the local product catalog JSON
        cms_project_id: Content service project identifier
        cms_dataset: Content service dataset name
        cms_api_version: Dated query API version
        cms_use_cdn: Query the cached CDN endpoint instead of the live API
        cms_token: Optional read token for private datasets
        cms_document_type: Document type holding products
        cms_timeout_seconds: HTTP timeout for catalog queries
        currency_symbol: Symbol prefixed to formatted prices

    Example:
        >>> settings = Settings()
        >>> settings.query_host
        'tt81m3xp.apicdn.sanity.io'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================
    app_name: str = Field(
        default="Storefront",
        description="Display name for the application"
    )

    app_env: str = Field(
        default="development",
        description="Environment mode: development, staging, production"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode for verbose logging"
    )

    # =========================================================================
    # SERVER SETTINGS
    # =========================================================================
    host: str = Field(default="0.0.0.0", description="Server bind address")

    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Server port number"
    )

    cors_origins: str = Field(
        default='["*"]',
        description="Allowed CORS origins as JSON array string"
    )

    # =========================================================================
    # CATALOG SETTINGS
    # =========================================================================
    catalog_backend: str = Field(
        default="cms",
        description="Product source: cms or file"
    )

    products_file: str = Field(
        default="data/products.json",
        description="Path to product catalog JSON (file backend)"
    )

    # =========================================================================
    # CONTENT SERVICE SETTINGS
    # =========================================================================
    cms_project_id: str = Field(
        default="tt81m3xp",
        min_length=1,
        description="Content service project identifier"
    )

    cms_dataset: str = Field(default="production", description="Dataset name")

    cms_api_version: str = Field(
        default="2024-01-03",
        description="Dated query API version (YYYY-MM-DD)"
    )

    cms_use_cdn: bool = Field(
        default=True,
        description="Use the cached CDN query endpoint"
    )

    cms_token: Optional[str] = Field(
        default=None,
        description="Read token for private datasets"
    )

    cms_document_type: str = Field(
        default="product",
        description="Document type holding products"
    )

    cms_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        le=120,
        description="HTTP timeout for catalog queries"
    )

    # =========================================================================
    # PRESENTATION SETTINGS
    # =========================================================================
    currency_symbol: str = Field(default="$", description="Currency symbol")

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        """Normalize environment name, falling back to development."""
        valid_envs = {"development", "staging", "production"}
        normalized = value.lower().strip()

        if normalized not in valid_envs:
            logger.warning(
                f"Unknown environment '{value}', defaulting to 'development'"
            )
            return "development"

        return normalized

    @field_validator("catalog_backend")
    @classmethod
    def validate_catalog_backend(cls, value: str) -> str:
        """
        Validate the catalog backend name.

        Raises:
            ValueError: If backend is not supported
        """
        normalized = value.lower().strip()
        if normalized not in {"cms", "file"}:
            raise ValueError(
                f"Unsupported catalog backend: {value}. Supported: cms, file"
            )
        return normalized

    @field_validator("cms_api_version")
    @classmethod
    def validate_api_version(cls, value: str) -> str:
        """Accept both '2024-01-03' and 'v2024-01-03'."""
        return value.strip().lstrip("v")

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def products_path(self) -> Path:
        """Get products file as Path object."""
        return Path(self.products_file)

    @property
    def query_host(self) -> str:
        """Host serving catalog queries (CDN or live API)."""
        domain = "apicdn.sanity.io" if self.cms_use_cdn else "api.sanity.io"
        return f"{self.cms_project_id}.{domain}"

    @property
    def cors_origins_list(self) -> List[str]:
        """
        Parse CORS origins from JSON string to list.

        Returns:
            List of allowed origin strings
        """
        try:
            origins = json.loads(self.cors_origins)
            if isinstance(origins, list):
                return origins
            return ["*"]
        except json.JSONDecodeError:
            logger.warning(
                f"Invalid CORS origins JSON: {self.cors_origins}, "
                "defaulting to ['*']"
            )
            return ["*"]

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"app_env={self.app_env!r}, "
            f"catalog_backend={self.catalog_backend!r}, "
            f"debug={self.debug})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance (singleton pattern).

    Returns:
        Global Settings instance
    """
    settings = Settings()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
