"""
Application Configuration Module

Centralizes all configuration using environment variables with Pydantic Settings.
Supports three modes:
    - DEVELOPMENT: In-memory demo backend, in-memory storage, recorded notifications
    - STAGING: Real HTTP backend and file storage, verbose logging
    - PRODUCTION: Real HTTP backend and file storage

The ENV_MODE variable controls which collaborators are instantiated by the
service factories, so the same session store runs against a local demo
backend or the hosted API without code changes.

Usage:
    from foodingo.core.config import get_settings

    settings = get_settings()
    if settings.is_development:
        # Mock API client, memory storage
    else:
        # httpx client, file storage

Version: 1.0.0
"""

import logging
import sys
from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentMode(str, Enum):
    """
    Application environment modes.

    Attributes:
        DEVELOPMENT: Local work against the in-memory demo backend
        PRODUCTION: Live backend
        STAGING: Live backend with a staging base URL
    """
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    STAGING = "staging"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.

    Attributes:
        env_mode: Current environment (development/production/staging)
        debug: Enable verbose logging

        # Remote API
        api_base_url: Base URL of the REST backend
        api_timeout_seconds: Per-request timeout enforced by the HTTP client

        # Storage
        storage_directory: Directory holding the key-value file
        storage_filename: Name of the JSON key-value file
        storage_lock_timeout: Seconds to wait for the file lock

        # Checkout
        delivery_fee: Flat delivery charge
        tax_rate: Tax rate applied to the subtotal (decimal)
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
        default="Foodingo",
        description="Application display name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )

    # ==========================================================================
    # REMOTE API
    # ==========================================================================

    api_base_url: str = Field(
        default="https://foodingo-backend-8ay1.onrender.com/api",
        description="Base URL of the REST backend"
    )
    api_timeout_seconds: float = Field(
        default=15.0,
        description="Per-request timeout in seconds"
    )

    # ==========================================================================
    # KEY-VALUE STORAGE
    # ==========================================================================

    storage_directory: str = Field(
        default="data",
        description="Directory for the key-value storage file"
    )
    storage_filename: str = Field(
        default="storage.json",
        description="Key-value storage filename"
    )
    storage_lock_timeout: int = Field(
        default=10,
        description="Seconds to wait for the storage file lock"
    )

    # ==========================================================================
    # MOCK BACKEND
    # ==========================================================================

    mock_failure_rate: float = Field(
        default=0.05,
        description="Probability of a simulated API failure in development"
    )
    mock_min_latency: float = Field(
        default=0.05,
        description="Minimum simulated API latency in seconds"
    )
    mock_max_latency: float = Field(
        default=0.3,
        description="Maximum simulated API latency in seconds"
    )

    # ==========================================================================
    # DEVELOPMENT SERVER
    # ==========================================================================

    devserver_host: str = Field(
        default="127.0.0.1",
        description="Host for the development backend"
    )
    devserver_port: int = Field(
        default=8001,
        description="Port for the development backend"
    )

    # ==========================================================================
    # CHECKOUT CONFIGURATION
    # ==========================================================================

    delivery_fee: float = Field(
        default=40.0,
        description="Flat delivery fee"
    )
    tax_rate: float = Field(
        default=0.05,
        description="Tax rate as decimal (5%)"
    )
    currency_symbol: str = Field(
        default="₹",
        description="Currency symbol used in formatted amounts"
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

    @field_validator("tax_rate", "mock_failure_rate")
    @classmethod
    def validate_rate(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("Rates must be between 0 and 1")
        return v

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.env_mode == EnvironmentMode.DEVELOPMENT

    @property
    def storage_path(self) -> Path:
        """Full path of the key-value storage file."""
        return Path(self.storage_directory) / self.storage_filename

    def format_amount(self, amount: float) -> str:
        """Format an amount with the configured currency symbol."""
        return f"{self.currency_symbol}{amount:.2f}"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Configured application settings

    Example:
        >>> settings = get_settings()
        >>> print(settings.env_mode)
        EnvironmentMode.DEVELOPMENT
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
        Configured package logger
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
    logging.getLogger("filelock").setLevel(logging.WARNING)

    return logging.getLogger("foodingo")
