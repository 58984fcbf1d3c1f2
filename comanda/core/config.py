"""
Application Configuration Module

Centralizes all configuration using environment variables with Pydantic Settings.
The STORAGE_BACKEND variable selects where the menu and the orders live:
    - memory: process-wide collections, lost on restart (default)
    - database: SQLAlchemy async engine (SQLite or PostgreSQL)

Usage:
    from comanda.core.config import get_settings

    settings = get_settings()
    if settings.uses_database:
        # SQL repositories
    else:
        # In-memory repositories

Version: 1.0.0
"""

import logging
import sys
from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentMode(str, Enum):
    """
    Application environment modes.

    Attributes:
        DEVELOPMENT: Local testing, seeded menu, verbose defaults
        PRODUCTION: Live restaurant floor
        STAGING: Pre-production testing
    """
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    STAGING = "staging"


class StorageBackend(str, Enum):
    """Where the catalog and the ledger keep their records."""
    MEMORY = "memory"
    DATABASE = "database"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.

    Attributes:
        env_mode: Current environment (development/production/staging)
        debug: Enable verbose logging and error details

        # Storage
        storage_backend: memory or database
        database_url: SQLAlchemy async connection string

        # Business Configuration
        restaurant_name: Display name for the restaurant
        seed_default_menu: Load the default menu into an empty catalog
        strict_status_transitions: Reject out-of-order status changes

        # Export
        export_paid_orders: Queue an Excel export when an order is paid
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # ENVIRONMENT
    # ==========================================================================

    env_mode: EnvironmentMode = Field(
        default=EnvironmentMode.DEVELOPMENT,
        description="Application environment mode"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )

    # ==========================================================================
    # APPLICATION
    # ==========================================================================

    app_name: str = Field(
        default="Comanda",
        description="Application display name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host"
    )
    api_port: int = Field(
        default=8001,
        description="API server port"
    )

    # ==========================================================================
    # STORAGE
    # ==========================================================================

    storage_backend: StorageBackend = Field(
        default=StorageBackend.MEMORY,
        description="Repository implementation for menu and orders"
    )
    database_url: str = Field(
        default="sqlite+aiosqlite:///./comanda.db",
        description="SQLAlchemy async connection URL"
    )
    database_echo: bool = Field(
        default=False,
        description="Log every SQL statement"
    )

    # ==========================================================================
    # REDIS / CELERY
    # ==========================================================================

    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL"
    )

    # ==========================================================================
    # BUSINESS CONFIGURATION
    # ==========================================================================

    restaurant_name: str = Field(
        default="Restaurante da Praça",
        description="Restaurant display name"
    )
    seed_default_menu: bool = Field(
        default=True,
        description="Load the default menu when the catalog is empty"
    )
    strict_status_transitions: bool = Field(
        default=False,
        description="Only allow the kitchen forward step or a move to paid"
    )
    top_items_limit: int = Field(
        default=10,
        ge=1,
        description="How many best sellers the daily report lists"
    )

    # ==========================================================================
    # FILE STORAGE
    # ==========================================================================

    export_paid_orders: bool = Field(
        default=False,
        description="Queue an Excel export task when an order becomes paid"
    )
    data_directory: str = Field(
        default="data",
        description="Directory for data files"
    )
    excel_filename: str = Field(
        default="vendas.xlsx",
        description="Excel export filename"
    )
    excel_lock_timeout: int = Field(
        default=30,
        description="Seconds to wait for file lock"
    )

    # ==========================================================================
    # VALIDATORS
    # ==========================================================================

    @field_validator("env_mode", mode="before")
    @classmethod
    def validate_env_mode(cls, v: str) -> EnvironmentMode:
        """Convert string to EnvironmentMode enum."""
        if isinstance(v, EnvironmentMode):
            return v
        try:
            return EnvironmentMode(v.lower())
        except ValueError:
            valid = [e.value for e in EnvironmentMode]
            raise ValueError(f"Invalid env_mode. Must be one of: {valid}")

    @field_validator("storage_backend", mode="before")
    @classmethod
    def validate_storage_backend(cls, v: str) -> StorageBackend:
        """Convert string to StorageBackend enum."""
        if isinstance(v, StorageBackend):
            return v
        try:
            return StorageBackend(v.lower())
        except ValueError:
            valid = [e.value for e in StorageBackend]
            raise ValueError(f"Invalid storage_backend. Must be one of: {valid}")

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.env_mode == EnvironmentMode.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.env_mode == EnvironmentMode.PRODUCTION

    @property
    def uses_database(self) -> bool:
        """Check if the SQL repositories should be used."""
        return self.storage_backend == StorageBackend.DATABASE


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache so settings are loaded only once per process.
    Call get_settings.cache_clear() after changing the environment.

    Returns:
        Settings: Configured application settings
    """
    return Settings()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured root logger
    """
    settings = get_settings()

    if settings.debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-25s │ %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    return logging.getLogger("comanda")
