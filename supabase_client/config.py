# supabase_client/config.py
from __future__ import annotations

from typing import Optional

from supabase import Client, create_client


def get_supabase_client(url: Optional[str], key: Optional[str]) -> Client:
    """Return an authenticated Supabase client; credentials come from core.config.Settings."""
    if not url or not key:
        raise RuntimeError("Supabase credentials not set (SUPABASE_URL / SUPABASE_ANON_KEY).")
    return create_client(url, key)
