"""Supabase client initialization."""

from functools import lru_cache

from supabase import Client, create_client

from app.core.config import Settings, get_settings


def create_supabase(settings: Settings) -> Client:
    """
    Build a Supabase client from explicit settings.

    Raises:
        RuntimeError: If client initialization fails
    """
    try:
        return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
    except Exception as e:
        raise RuntimeError(f"Failed to initialize Supabase client: {e}") from e


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """
    Get the process-wide Supabase client used by the API layer.

    Services never call this themselves; stores receive the client in their
    constructor.
    """
    return create_supabase(get_settings())
