"""
core/enrichment.py
------------------
AI enrichment of existing coaster concepts.

Flow (single pass, no retries)
------------------------------
1. Fetch the concept by id. When ownership is required (the default), an
   anonymous caller is Unauthenticated and a missing or foreign id is the
   same NotFoundOrForbidden. Otherwise a missing id is NotFound.
2. Build the prompt for the requested kind.
3. POST it to the text-generation API.
4. Empty completion -> report success, write nothing.
5. Otherwise patch the matching AI field and return the text.

The fetch, the API call and the patch are separate steps with no lock held
across them. A concept deleted in between surfaces as EnrichmentNotPersisted,
which still carries the generated text.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol

import requests

from core.concept_store import ConceptStore
from core.config import EnrichmentConfig
from core.enrichment_kind import EnrichmentKind
from core.errors import (
    CoasterForgeError,
    EnrichmentFailed,
    EnrichmentNotPersisted,
    NotFound,
    NotFoundOrForbidden,
    Unauthenticated,
)
from core.logging_config import get_logger
from core.prompts import build_prompt

logger = get_logger("enrichment")


class ActivityLog(Protocol):
    def record(self, entry: Dict[str, Any]) -> None:
        ...


# --------------------------------------------------------------------------- #
# HTTP client
# --------------------------------------------------------------------------- #

class TextGenerationClient:
    """Minimal chat-completions client on top of requests."""

    def __init__(self, config: EnrichmentConfig, session: Optional[requests.Session] = None):
        self.config = config
        self._session = session or requests.Session()

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.config.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.config.max_tokens,
        }

    def complete(self, prompt: str) -> Optional[str]:
        """
        Return the first completion's text, or None when the API sent none.

        Raises EnrichmentFailed for missing configuration, transport errors,
        non-2xx responses and bodies that are not JSON.
        """
        if not self.config.is_configured:
            raise EnrichmentFailed("Text-generation API base URL or key is not configured")

        try:
            response = self._session.post(
                self.config.completions_url,
                json=self.build_payload(prompt),
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.config.api_key}",
                },
                timeout=self.config.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise EnrichmentFailed() from e
        except ValueError as e:
            # invalid JSON body
            raise EnrichmentFailed() from e

        return extract_content(data)


def extract_content(data: Any) -> Optional[str]:
    """choices[0].message.content, tolerating any missing level."""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    message = choices[0].get("message") or {}
    content = message.get("content") if isinstance(message, dict) else None
    return content if isinstance(content, str) and content else None


# --------------------------------------------------------------------------- #
# Orchestrator
# --------------------------------------------------------------------------- #

class EnrichmentOrchestrator:
    def __init__(
        self,
        store: ConceptStore,
        client: TextGenerationClient,
        activity_log: Optional[ActivityLog] = None,
        require_owner: bool = True,
    ):
        self.store = store
        self.client = client
        self.activity_log = activity_log
        self.require_owner = require_owner

    def enrich(self, user_id: Optional[str], concept_id: str, kind: EnrichmentKind) -> Optional[str]:
        """Generate text of `kind` for a concept and store it. Returns the text (or None)."""
        kind = EnrichmentKind(kind)
        if self.require_owner and not user_id:
            raise Unauthenticated()
        concept = self.store.get_by_id(concept_id)
        if self.require_owner:
            # Missing and foreign ids are indistinguishable to the caller
            if concept is None or concept["userId"] != user_id:
                raise NotFoundOrForbidden()
        elif concept is None:
            raise NotFound()

        prompt = build_prompt(kind, concept)
        started = time.monotonic()
        try:
            content = self.client.complete(prompt)
        except EnrichmentFailed as e:
            logger.error("[Enrichment] %s for concept %s failed: %r", kind.value, concept_id, e.__cause__ or e)
            self._record(concept_id, kind, user_id, "failed", started, error=str(e.__cause__ or e))
            raise

        if not content:
            logger.warning("[Enrichment] Empty completion for %s/%s; nothing stored.", concept_id, kind.value)
            self._record(concept_id, kind, user_id, "empty", started)
            return None

        try:
            self.store.patch_ai_field(user_id, concept_id, kind, content)
        except CoasterForgeError as e:
            logger.error("[Enrichment] Generated %s for %s but could not save it: %s", kind.value, concept_id, e)
            self._record(concept_id, kind, user_id, "not_persisted", started, error=str(e))
            raise EnrichmentNotPersisted(content, reason=str(e)) from e

        logger.info("[Enrichment] Stored %s for concept %s (%d chars)", kind.field, concept_id, len(content))
        self._record(concept_id, kind, user_id, "ok", started)
        return content

    def _record(
        self,
        concept_id: str,
        kind: EnrichmentKind,
        user_id: Optional[str],
        status: str,
        started: float,
        error: Optional[str] = None,
    ) -> None:
        if self.activity_log is None:
            return
        self.activity_log.record(
            {
                "concept_id": concept_id,
                "kind": kind.value,
                "user_id": user_id,
                "status": status,
                "model": self.client.config.model,
                "duration_ms": round((time.monotonic() - started) * 1000, 1),
                "error": error,
                "created_at": datetime.now(timezone.utc).isoformat(),
            }
        )
