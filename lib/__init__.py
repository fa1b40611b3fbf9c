# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# - supabase_client.py: Singleton Supabase client (database + storage)
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError

__all__ = [
    "SupabaseClient",
    "SupabaseClientError",
]
