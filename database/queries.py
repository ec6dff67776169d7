# database/queries.py
from __future__ import annotations
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import CoasterConcept, CoasterData
from .db_setup import SessionLocal

# Columns a caller may patch after creation; everything else is fixed at generation time.
MUTABLE_FIELDS = frozenset({"name", "is_public", "ai_description", "ai_theming", "ai_layout_ideas"})


# ---------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------
def load_reference_data() -> Dict[str, List[str]]:
    """Return every reference category as {category: items}."""
    with SessionLocal() as session:
        rows = session.scalars(select(CoasterData)).all()
        return {row.category: list(row.items or []) for row in rows}


def upsert_reference_category(category: str, items: List[str], *, overwrite: bool = True) -> bool:
    """
    Insert a reference category, or replace its items when `overwrite` is set.
    Returns True if anything was written.
    """
    with SessionLocal() as session:
        row = session.scalars(select(CoasterData).where(CoasterData.category == category)).first()
        if row is None:
            session.add(CoasterData(category=category, items=list(items)))
        elif overwrite:
            row.items = list(items)
        else:
            return False
        session.commit()
        return True


# ---------------------------------------------------------------------
# CRUD operations for CoasterConcept
# ---------------------------------------------------------------------
def _fetch(session: Session, concept_id: str, owner_id: Optional[str]) -> Optional[CoasterConcept]:
    concept = session.scalars(select(CoasterConcept).where(CoasterConcept.id == concept_id)).first()
    if concept is None:
        return None
    if owner_id is not None and concept.user_id != owner_id:
        return None
    return concept


def insert_concept(
    *,
    user_id: str,
    name: str,
    coaster_type: str,
    thrill_level: str,
    manufacturer: str,
    layout: str,
    theme: str,
    special_elements: List[str],
    roll_data: Dict[str, int],
) -> CoasterConcept:
    """
    Create and persist a new, private CoasterConcept.

    Args:
        user_id: Owning user identifier
        name: Display name
        coaster_type, thrill_level, manufacturer, layout, theme: Generated attributes
        special_elements: Ordered list of distinct element names
        roll_data: The six roll values used for generation

    Returns:
        The persisted CoasterConcept instance
    """
    with SessionLocal() as session:
        concept = CoasterConcept(
            user_id=user_id,
            name=name,
            coaster_type=coaster_type,
            thrill_level=thrill_level,
            manufacturer=manufacturer,
            layout=layout,
            theme=theme,
            special_elements=list(special_elements),
            roll_data=dict(roll_data),
            is_public=False,
        )
        session.add(concept)
        session.commit()
        session.refresh(concept)
        return concept


def get_concept(concept_id: str) -> Optional[CoasterConcept]:
    """Return a single concept by ID."""
    with SessionLocal() as session:
        return _fetch(session, concept_id, None)


def list_concepts_by_user(user_id: str, limit: int = 20) -> List[CoasterConcept]:
    """Return up to `limit` concepts owned by `user_id`, newest first."""
    with SessionLocal() as session:
        stmt = (
            select(CoasterConcept)
            .where(CoasterConcept.user_id == user_id)
            .order_by(CoasterConcept.seq.desc())
            .limit(limit)
        )
        return list(session.scalars(stmt).all())


def list_public_concepts(limit: int = 10) -> List[CoasterConcept]:
    """Return up to `limit` public concepts, newest first."""
    with SessionLocal() as session:
        stmt = (
            select(CoasterConcept)
            .where(CoasterConcept.is_public.is_(True))
            .order_by(CoasterConcept.seq.desc())
            .limit(limit)
        )
        return list(session.scalars(stmt).all())


def update_concept(
    concept_id: str,
    *,
    owner_id: Optional[str] = None,
    **updates: Any,
) -> Optional[CoasterConcept]:
    """
    Patch mutable fields on an existing concept.

    When `owner_id` is given the concept must belong to that user; the
    check and the write happen in the same session.
    Returns the updated concept, or None if not found / not owned.
    """
    unknown = set(updates) - MUTABLE_FIELDS
    if unknown:
        raise ValueError(f"Cannot update immutable or unknown fields: {sorted(unknown)}")

    with SessionLocal() as session:
        concept = _fetch(session, concept_id, owner_id)
        if concept is None:
            return None
        for key, value in updates.items():
            setattr(concept, key, value)
        session.commit()
        session.refresh(concept)
        return concept


def toggle_concept_public(concept_id: str, *, owner_id: Optional[str] = None) -> Optional[bool]:
    """Flip is_public. Returns the new value, or None if not found / not owned."""
    with SessionLocal() as session:
        concept = _fetch(session, concept_id, owner_id)
        if concept is None:
            return None
        concept.is_public = not concept.is_public
        session.commit()
        return bool(concept.is_public)


def delete_concept(concept_id: str, *, owner_id: Optional[str] = None) -> bool:
    """Delete concept by ID. Returns True if deleted."""
    with SessionLocal() as session:
        concept = _fetch(session, concept_id, owner_id)
        if concept is None:
            return False
        session.delete(concept)
        session.commit()
        return True
