"""
CoasterForge Backend API
========================

FastAPI application factory for the coaster-concept service.

Wiring
------
• Settings → logging, database engine, optional reference seeding.
• ConceptStore (authorization-gated CRUD) on `app.state.store`.
• EnrichmentOrchestrator (text-generation API + write-back) on
  `app.state.orchestrator`; its API credentials come from Settings, passed
  in explicitly through EnrichmentConfig.
• Optional Supabase activity log for enrichment attempts; disabled (with a
  log line) when credentials are missing or the client cannot be created.

`create_app` accepts collaborators so tests can inject a fake HTTP session
or Supabase client.
"""

from __future__ import annotations

from typing import Any, Optional

import requests
from fastapi import FastAPI

from backend.errors import register_error_handlers
from backend.routes.concepts import router as concepts_router
from backend.routes.logs import router as logs_router
from core.concept_store import ConceptStore
from core.config import Settings
from core.enrichment import EnrichmentOrchestrator, TextGenerationClient
from core.health import system_health
from core.logging_config import get_logger, setup_logging
from core.metadata import get_metadata
from database.db_setup import init_db
from database.seed import seed_reference_data

logger = get_logger("backend")


def _build_activity_log(settings: Settings, supabase_client: Any = None):
    """Return a SupabaseActivityLog, or None when Supabase is not usable."""
    if supabase_client is None and not settings.supabase_configured:
        logger.info("[Supabase] Not configured; enrichment activity logging disabled.")
        return None

    from supabase_client.helpers import SupabaseActivityLog

    if supabase_client is None:
        from supabase_client.config import get_supabase_client

        try:
            supabase_client = get_supabase_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
        except Exception as e:  # noqa: BLE001 - optional component
            logger.warning("[Supabase] ⚠️ Client unavailable; activity logging disabled. Reason: %s", e)
            return None

    logger.info("[Supabase] ✅ Enrichment activity logging enabled.")
    return SupabaseActivityLog(supabase_client)


def create_app(
    settings: Optional[Settings] = None,
    *,
    http_session: Optional[requests.Session] = None,
    supabase_client: Any = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    setup_logging(settings.LOG_LEVEL)

    init_db(settings.DATABASE_URL, echo=settings.DB_ECHO)
    if settings.SEED_REFERENCE_DATA:
        seed_reference_data()

    metadata = get_metadata()
    app = FastAPI(
        title="CoasterForge Backend API",
        version=settings.BACKEND_VERSION,
        description=metadata["description"],
    )

    store = ConceptStore()
    activity_log = _build_activity_log(settings, supabase_client)
    client = TextGenerationClient(settings.enrichment_config(), session=http_session)
    if not client.config.is_configured:
        logger.warning("[Enrichment] OPENAI_BASE_URL / OPENAI_API_KEY not set; /expand will fail.")

    app.state.settings = settings
    app.state.store = store
    app.state.activity_log = activity_log
    app.state.orchestrator = EnrichmentOrchestrator(store, client, activity_log=activity_log)

    register_error_handlers(app)
    app.include_router(concepts_router)
    app.include_router(logs_router)

    @app.get("/")
    async def root():
        """Basic liveness probe."""
        return {
            "status": "ok",
            "message": "CoasterForge Backend is live.",
            "version": app.version,
            "supabase_enabled": activity_log is not None,
        }

    @app.get("/health")
    def health():
        return system_health(settings)

    @app.get("/reference")
    def reference_data():
        """Current reference snapshot used for generation."""
        return store.reference_snapshot()

    logger.info("[Backend] CoasterForge API ready (db=%s).", settings.DATABASE_URL.split("://")[0])
    return app
