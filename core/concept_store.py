"""
core/concept_store.py
---------------------
Authorization-gated operations on coaster concepts.

Caller identity is passed in explicitly (`user_id`, None when anonymous).
Ownership failures and missing records both raise NotFoundOrForbidden so the
two cases look identical from the outside.

Row access goes through database.queries; ownership checks and writes run in
the same session there.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from core.concept_generator import RollSet, generate
from core.enrichment_kind import EnrichmentKind
from core.errors import NotFoundOrForbidden, Unauthenticated
from core.logging_config import get_logger
from database import queries

logger = get_logger("store")

USER_LIST_LIMIT = 20
PUBLIC_LIST_LIMIT = 10

ReferenceLoader = Callable[[], Mapping[str, Sequence[str]]]


class ConceptStore:
    """Create, read, list and mutate concepts with per-owner authorization."""

    def __init__(self, reference_loader: ReferenceLoader = queries.load_reference_data):
        self._reference_loader = reference_loader

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _require_user(user_id: Optional[str]) -> str:
        if not user_id:
            raise Unauthenticated()
        return user_id

    def reference_snapshot(self) -> Dict[str, List[str]]:
        return {k: list(v) for k, v in self._reference_loader().items()}

    # ------------------------------------------------------------------ #
    # Create / read
    # ------------------------------------------------------------------ #

    def create(self, user_id: Optional[str], rolls: RollSet) -> str:
        """Generate a concept from `rolls` and persist it as private. Returns its id."""
        owner = self._require_user(user_id)
        generated = generate(rolls, self.reference_snapshot())
        concept = queries.insert_concept(
            user_id=owner,
            name=generated.name,
            coaster_type=generated.coaster_type,
            thrill_level=generated.thrill_level,
            manufacturer=generated.manufacturer,
            layout=generated.layout,
            theme=generated.theme,
            special_elements=list(generated.special_elements),
            roll_data=generated.roll_data,
        )
        logger.info("[Store] Created concept %s (%s) for user %s", concept.id, concept.name, owner)
        return concept.id

    def get_by_id(self, concept_id: str) -> Optional[Dict[str, Any]]:
        concept = queries.get_concept(concept_id)
        return concept.to_dict() if concept else None

    def list_mine(self, user_id: Optional[str]) -> List[Dict[str, Any]]:
        if not user_id:
            return []
        return [c.to_dict() for c in queries.list_concepts_by_user(user_id, limit=USER_LIST_LIMIT)]

    def list_public(self) -> List[Dict[str, Any]]:
        return [c.to_dict() for c in queries.list_public_concepts(limit=PUBLIC_LIST_LIMIT)]

    # ------------------------------------------------------------------ #
    # Owner-only mutations
    # ------------------------------------------------------------------ #

    def toggle_public(self, user_id: Optional[str], concept_id: str) -> bool:
        """Flip visibility. Returns the new isPublic value."""
        owner = self._require_user(user_id)
        new_value = queries.toggle_concept_public(concept_id, owner_id=owner)
        if new_value is None:
            raise NotFoundOrForbidden()
        logger.info("[Store] Concept %s is now %s", concept_id, "public" if new_value else "private")
        return new_value

    def rename(self, user_id: Optional[str], concept_id: str, name: str) -> None:
        owner = self._require_user(user_id)
        if queries.update_concept(concept_id, owner_id=owner, name=name) is None:
            raise NotFoundOrForbidden()

    def delete(self, user_id: Optional[str], concept_id: str) -> None:
        owner = self._require_user(user_id)
        if not queries.delete_concept(concept_id, owner_id=owner):
            raise NotFoundOrForbidden()
        logger.info("[Store] Deleted concept %s", concept_id)

    def patch_ai_field(
        self,
        user_id: Optional[str],
        concept_id: str,
        kind: EnrichmentKind,
        content: str,
    ) -> None:
        """Write `content` into the AI field that belongs to `kind`."""
        owner = self._require_user(user_id)
        kind = EnrichmentKind(kind)
        updated = queries.update_concept(concept_id, owner_id=owner, **{kind.column: content})
        if updated is None:
            raise NotFoundOrForbidden()
