# database/models.py
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, JSON, String, Text

# Important: must match Base from db_setup.py
from .db_setup import Base


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CoasterData(Base):
    """Reference category: a named, ordered list of candidate strings."""
    __tablename__ = "coaster_data"

    id = Column(Integer, primary_key=True, autoincrement=True)
    category = Column(String(64), nullable=False, unique=True)
    items = Column(JSON, nullable=False, default=list)

    def __repr__(self):
        return f"<CoasterData(category={self.category}, items={len(self.items or [])})>"


class CoasterConcept(Base):
    """SQLAlchemy ORM model for a generated roller-coaster concept."""
    __tablename__ = "coaster_concepts"

    # insertion order; breaks ties between equal created_at values
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(32), nullable=False, unique=True, index=True, default=_new_id)
    user_id = Column(String(128), nullable=False)
    name = Column(String(200), nullable=False)
    coaster_type = Column(String(120), nullable=False)
    thrill_level = Column(String(120), nullable=False)
    manufacturer = Column(String(120), nullable=False)
    layout = Column(String(120), nullable=False)
    theme = Column(String(200), nullable=False)
    special_elements = Column(JSON, nullable=False, default=list)
    roll_data = Column(JSON, nullable=False, default=dict)
    is_public = Column(Boolean, nullable=False, default=False)
    ai_description = Column(Text, nullable=True)
    ai_theming = Column(Text, nullable=True)
    ai_layout_ideas = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        Index("by_user", "user_id", "seq"),
        Index("by_public", "is_public", "seq"),
    )

    def to_dict(self) -> Dict[str, Any]:
        """Public record shape returned by the store and the API."""
        return {
            "_id": self.id,
            "_creationTime": self.created_at.isoformat() if self.created_at else None,
            "userId": self.user_id,
            "name": self.name,
            "coasterType": self.coaster_type,
            "thrillLevel": self.thrill_level,
            "manufacturer": self.manufacturer,
            "layout": self.layout,
            "theme": self.theme,
            "specialElements": list(self.special_elements or []),
            "rollData": dict(self.roll_data or {}),
            "isPublic": bool(self.is_public),
            "aiDescription": self.ai_description,
            "aiTheming": self.ai_theming,
            "aiLayoutIdeas": self.ai_layout_ideas,
        }

    def __repr__(self):
        return f"<CoasterConcept(id={self.id}, name={self.name}, user_id={self.user_id})>"
