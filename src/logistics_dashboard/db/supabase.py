"""Supabase client for the durable record store."""

import logging
from functools import lru_cache

from supabase import Client, create_client

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


@lru_cache()
def get_supabase_client(url: str | None, key: str | None) -> Client:
    """Get a cached Supabase client for the given project credentials.

    Raises:
        ConfigurationError: if the URL or key is missing, or the client can not be built.
        Note: This does not test the connection - actual queries may fail with network errors.
    """
    if not url or not key:
        raise ConfigurationError(
            "Supabase credentials not configured (set DASHBOARD_SUPABASE_URL and DASHBOARD_SUPABASE_KEY)",
            setting="supabase_url" if not url else "supabase_key",
        )
    try:
        return create_client(url, key)
    except Exception as exc:
        logger.error("Failed to create Supabase client: %s", exc)
        raise ConfigurationError(f"Failed to create Supabase client: {exc}", setting="supabase_url") from exc
