from .base import ReviewStore
from .sqlite import SQLiteStore
from .supabase import SupabaseStore
from code_critic.config import Settings
from code_critic.errors import ConfigurationError


def create_store(settings: Settings) -> ReviewStore:
    """Build the review store selected by settings.store_backend."""
    if settings.store_backend == "supabase":
        return SupabaseStore(url=settings.supabase_url, key=settings.supabase_key)
    if settings.store_backend == "sqlite":
        return SQLiteStore(db_path=settings.sqlite_path)
    raise ConfigurationError(f"Misconfigured: Unknown store backend {settings.store_backend!r}")


__all__ = ["ReviewStore", "SQLiteStore", "SupabaseStore", "create_store"]
