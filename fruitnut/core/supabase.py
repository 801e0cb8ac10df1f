"""Supabase client factories for database and auth operations."""

from functools import lru_cache
from typing import Any

from supabase import Client, create_client
from supabase.lib.client_options import SyncClientOptions
from supabase_auth import SyncMemoryStorage

from fruitnut.core.config import get_settings


@lru_cache
def get_supabase_client() -> Client:
    """Get cached Supabase client singleton for table queries.

    IMPORTANT: Do NOT use this client for sign in / sign out - use
    create_auth_client() instead so the session of the signed-in user
    lives in one place only. SupabaseAuthProvider sets the user's access
    token on this client, so queries run under row level security as
    the signed-in user.

    Returns:
        Client: Supabase client instance.
    """
    settings = get_settings()
    return create_client(
        settings.supabase_url,
        settings.supabase_key,
    )


def create_auth_client() -> Client:
    """Create a fresh Supabase client for auth operations.

    The session is kept in memory only and is never refreshed in the
    background, so every auth state change goes through the app's own
    auth provider.

    Returns:
        Client: Fresh Supabase client instance with isolated session storage.
    """
    settings = get_settings()
    options = SyncClientOptions(
        storage=SyncMemoryStorage(),
        auto_refresh_token=False,
        persist_session=False,
    )
    return create_client(
        settings.supabase_url,
        settings.supabase_key,
        options=options,
    )


async def check_database_connection() -> dict[str, Any]:
    """Check if database connection is healthy.

    Returns:
        dict: Connection status with 'healthy' boolean and optional 'error' message.
    """
    try:
        client = get_supabase_client()
        client.table("donation_centers").select("id").limit(1).execute()
        return {"healthy": True}
    except Exception as e:
        return {"healthy": False, "error": str(e)}
