# supabase_client/helpers.py
"""
Utility layer for interacting with Supabase.

Features
--------
- Thin wrappers for inserting and fetching records.
- Automatic timestamp fallback (for tables without default `created_at`).
- `SupabaseActivityLog`: best-effort sink for enrichment activity; a failed
  insert is logged and never reaches the caller's operation.

Used by core.enrichment (via the activity log) and the /logs/recent endpoint.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List

from supabase import Client

from core.logging_config import get_logger

logger = get_logger("supabase")

ENRICHMENT_LOG_TABLE = "enrichment_logs"


def insert_record(client: Client, table: str, data: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Insert a record into a Supabase table.

    Parameters
    ----------
    client : supabase.Client
        Authenticated client.
    table : str
        Target table name in Supabase.
    data : dict
        Dictionary of column names and values.

    Returns
    -------
    list[dict]
        Inserted rows as returned by PostgREST (may be empty under RLS).
    """
    payload = dict(data)
    if "created_at" not in payload:
        payload["created_at"] = dt.datetime.now(dt.timezone.utc).isoformat()

    logger.debug("[Supabase] → Inserting into '%s', keys: %s", table, list(payload.keys()))
    res = client.table(table).insert(payload).execute()
    return res.data or []


def fetch_recent(client: Client, table: str, limit: int = 10) -> List[Dict[str, Any]]:
    """Fetch the most recent records, newest first."""
    logger.debug("[Supabase] → Fetching latest %d from '%s'", limit, table)
    res = (
        client.table(table)
        .select("*")
        .order("created_at", desc=True)
        .limit(limit)
        .execute()
    )
    return res.data or []


class SupabaseActivityLog:
    """Records enrichment attempts in the `enrichment_logs` table."""

    def __init__(self, client: Client, table: str = ENRICHMENT_LOG_TABLE):
        self.client = client
        self.table = table

    def record(self, entry: Dict[str, Any]) -> None:
        try:
            rows = insert_record(self.client, self.table, entry)
            if not rows:
                logger.warning("[Supabase] Insert returned no data (check RLS / schema).")
        except Exception as e:  # noqa: BLE001 - activity logging must not fail the enrichment
            logger.warning("[Supabase] ⚠️ Insert into '%s' failed: %s: %s", self.table, type(e).__name__, e)

    def recent(self, limit: int = 10) -> List[Dict[str, Any]]:
        return fetch_recent(self.client, self.table, limit=limit)
