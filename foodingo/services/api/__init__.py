"""
API Client Factory

Provides a single entry point for obtaining the remote API client.
The rest of the application stays agnostic about which implementation is
being used.

Usage:
    from foodingo.services.api import get_api_client

    # Returns MockApiClient or HttpApiClient based on ENV_MODE
    api = get_api_client()
    categories = await api.fetch_categories()

Environment Switching:
    - ENV_MODE=development → MockApiClient (in-memory demo backend)
    - ENV_MODE=staging → HttpApiClient
    - ENV_MODE=production → HttpApiClient
"""

import logging
from functools import lru_cache

from foodingo.core.config import get_settings
from foodingo.services.api.base import BaseApiClient
from foodingo.services.api.catalog import DemoBackend
from foodingo.services.api.http import HttpApiClient
from foodingo.services.api.mock import MockApiClient
from foodingo.services.storage import get_storage

logger = logging.getLogger(__name__)


@lru_cache()
def get_api_client() -> BaseApiClient:
    """
    Get the configured API client instance.

    The instance is cached so every screen shares one connection pool.

    Returns:
        BaseApiClient: Configured client
    """
    settings = get_settings()

    if settings.is_development:
        logger.info("API Client: Using MockApiClient (development mode)")
        return MockApiClient(
            failure_rate=settings.mock_failure_rate,
            min_latency=settings.mock_min_latency,
            max_latency=settings.mock_max_latency,
        )
    else:
        logger.info(f"API Client: Using HttpApiClient ({settings.env_mode.value} mode)")
        return HttpApiClient(storage=get_storage())


def reset_api_client() -> None:
    """
    Clear the cached client instance.

    The next call to get_api_client() builds a new one.
    """
    get_api_client.cache_clear()
    logger.debug("API client cache cleared")


__all__ = [
    "get_api_client",
    "reset_api_client",
    "BaseApiClient",
    "HttpApiClient",
    "MockApiClient",
    "DemoBackend",
]
