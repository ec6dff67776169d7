"""
core/enrichment_kind.py
-----------------------
The closed set of AI enrichment tasks and the concept field each one writes.
"""

from __future__ import annotations

from enum import Enum


class EnrichmentKind(str, Enum):
    DESCRIPTION = "description"
    THEMING = "theming"
    LAYOUT = "layout"

    @property
    def field(self) -> str:
        """Public (camelCase) record field."""
        return _FIELDS[self][0]

    @property
    def column(self) -> str:
        """ORM column on database.models.CoasterConcept."""
        return _FIELDS[self][1]


_FIELDS = {
    EnrichmentKind.DESCRIPTION: ("aiDescription", "ai_description"),
    EnrichmentKind.THEMING: ("aiTheming", "ai_theming"),
    EnrichmentKind.LAYOUT: ("aiLayoutIdeas", "ai_layout_ideas"),
}
