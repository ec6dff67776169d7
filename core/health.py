"""
core/health.py
--------------
System health diagnostics for the CoasterForge backend.

Purpose
-------
- Used by the FastAPI `/health` endpoint.
- Validates database connectivity and reports whether the optional
  Supabase activity log and the text-generation API are configured.
- Reports uptime, version, CPU/memory usage.
- Returns a JSON-safe dict ready for serialization.
"""

from __future__ import annotations

import platform
import time
from typing import Any, Dict

import psutil
from sqlalchemy import text

from core.config import Settings
from database.db_setup import current_engine

# Cache the process start time for uptime calculation
START_TIME = time.time()


def system_health(settings: Settings) -> Dict[str, Any]:
    """
    Return structured backend health diagnostics.

    Returns
    -------
    dict
        JSON-safe health report. `status` is "degraded" when the database
        cannot be reached.
    """
    status = "ok"
    message = "Backend operational."
    database_connected = False

    # --- Database connectivity ---
    engine = current_engine()
    if engine is None:
        status = "degraded"
        message = "Database not initialised."
    else:
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            database_connected = True
        except Exception as e:  # noqa: BLE001 - reported, not raised
            status = "degraded"
            message = f"Database check failed: {e.__class__.__name__}"

    # --- System metrics ---
    try:
        cpu_load = psutil.cpu_percent(interval=None)
        memory_usage = round(psutil.virtual_memory().used / (1024 * 1024), 2)
    except Exception:  # noqa: BLE001
        cpu_load = None
        memory_usage = None

    return {
        "status": status,
        "message": message,
        "version": settings.BACKEND_VERSION,
        "database_connected": database_connected,
        "supabase_enabled": settings.supabase_configured,
        "enrichment_configured": settings.enrichment_config().is_configured,
        "cpu_load": cpu_load,
        "memory_usage": memory_usage,
        "uptime_sec": round(time.time() - START_TIME, 2),
        "system": platform.system(),
        "release": platform.release(),
    }
