"""Record stores."""

from __future__ import annotations

from ..config import Settings
from .base import EntityStore
from .memory import MemoryStore
from .supabase_store import SupabaseStore


def build_store(settings: Settings) -> EntityStore:
    """Create the store selected by ``storage_backend``."""
    if settings.storage_backend == "supabase":
        from ..db.supabase import get_supabase_client

        return SupabaseStore(get_supabase_client(settings.supabase_url, settings.supabase_key))
    return MemoryStore()


__all__ = ["EntityStore", "MemoryStore", "SupabaseStore", "build_store"]
