# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a thin wrapper around the Supabase client.
# It implements the singleton pattern to reuse a single client connection
# across all requests; concurrency control is left to the client itself.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   client = SupabaseClient.get_client()
#   client.table("songs").select("*").execute()
# =============================================================================

from __future__ import annotations

import logging

from supabase import Client, create_client

from app.config import get_settings

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Raised for connection failures and failed queries; reaches the API
    catch-all handler as a 500.
    """

    def __init__(self, message: str, code: str = "SUPABASE_ERROR", suggestion: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.suggestion = suggestion


class SupabaseClient:
    """
    Singleton holder for the Supabase client.

    All methods are class methods for easy access without instantiation.
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            settings = get_settings()
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def connect(cls) -> None:
        """
        Create the client and run a trivial query to prove the database answers.

        Raises:
            SupabaseClientError: If the client cannot be created or the query fails
        """
        client = cls.get_client()
        try:
            client.table("users").select("id").limit(1).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Database connection check failed: {e}",
                code="CONNECTION_FAILED",
                suggestion="Check that the Supabase project is reachable and the users table exists"
            )
        logger.info(f"Connected to Supabase: {get_settings().SUPABASE_URL}")
