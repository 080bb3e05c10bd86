# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module owns the connection to the remote Postgres store (Supabase).
# It implements the singleton pattern to reuse a single client and provides
# helpers for interpreting PostgREST errors:
# - PGRST116 is the "zero (or many) rows for .single()" signal
# - every other failure is a real backend error
#
# Services never call get_client() themselves; the client is injected through
# app/dependencies.py so tests can substitute a fake.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   client = SupabaseClient.get_client()
#   rows = client.table("products").select("*").execute().data
# =============================================================================

from __future__ import annotations

import logging

from supabase import create_client, Client

from app.config import settings
from app.exceptions import StoreError

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST code returned by .single() when the result is not exactly one row
NO_ROWS_CODE = "PGRST116"


def is_no_rows_error(exc: Exception) -> bool:
    """Check whether a store error means "no matching row"."""
    code = getattr(exc, "code", None)
    if code == NO_ROWS_CODE:
        return True
    return NO_ROWS_CODE in str(exc)


def error_message(exc: Exception) -> str:
    """
    Extract a human-readable message from a store error.

    postgrest APIError carries `.message`; transport errors only have str().
    """
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or exc.__class__.__name__


class SupabaseClient:
    """
    Process-wide holder for the Supabase client.

    All methods are class methods for easy access without instantiation.

    Example:
        client = SupabaseClient.get_client()
        client.table("products").select("*").eq("id", 1).single().execute()
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Returns:
            Client: Supabase client instance

        Raises:
            StoreError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_ANON_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise StoreError(
                    message=f"Failed to create Supabase client: {e}",
                    details={"url": settings.SUPABASE_URL},
                ) from e
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached client (used on shutdown and in tests)."""
        cls._instance = None
