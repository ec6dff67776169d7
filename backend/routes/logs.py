"""
Enrichment Activity Log Endpoint
--------------------------------
Serves recent rows from the Supabase `enrichment_logs` table.
"""

from fastapi import APIRouter, HTTPException, Query, Request

router = APIRouter(prefix="/logs", tags=["logs"])


@router.get("/recent")
def get_recent_logs(request: Request, limit: int = Query(10, ge=1, le=200)):
    """
    Return the most recent enrichment attempts.

    503 when the Supabase activity log is not configured.
    """
    activity_log = getattr(request.app.state, "activity_log", None)
    if activity_log is None:
        raise HTTPException(status_code=503, detail="Supabase logging is disabled.")

    try:
        return activity_log.recent(limit=limit)
    except Exception as e:  # noqa: BLE001
        raise HTTPException(status_code=500, detail=f"Failed to fetch logs: {e}")
