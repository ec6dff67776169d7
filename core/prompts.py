"""Prompt templates for the three AI enrichment kinds."""

from __future__ import annotations

from typing import Any, Mapping

from core.enrichment_kind import EnrichmentKind

DESCRIPTION_TEMPLATE = """Create an exciting description for a roller coaster with these specs:
Type: {coasterType}
Thrill Level: {thrillLevel}
Manufacturer: {manufacturer}
Layout: {layout}
Theme: {theme}
Special Elements: {elements}

Write a compelling 2-3 sentence description that captures the excitement and unique features of this coaster."""

THEMING_TEMPLATE = """Design detailed theming for a {theme} themed roller coaster called "{name}":
Type: {coasterType}
Layout: {layout}
Elements: {elements}

Describe the visual theming, story elements, queue experience, and special effects that would bring this theme to life. Be creative and immersive!"""

LAYOUT_TEMPLATE = """Create a detailed layout description for this roller coaster:
Name: {name}
Type: {coasterType}
Manufacturer: {manufacturer}
Layout Style: {layout}
Thrill Level: {thrillLevel}
Key Elements: {elements}

Describe the ride experience from start to finish, including lift hill, key elements, pacing, and finale. Make it exciting and technically feasible!"""

TEMPLATES = {
    EnrichmentKind.DESCRIPTION: DESCRIPTION_TEMPLATE,
    EnrichmentKind.THEMING: THEMING_TEMPLATE,
    EnrichmentKind.LAYOUT: LAYOUT_TEMPLATE,
}


def build_prompt(kind: EnrichmentKind, concept: Mapping[str, Any]) -> str:
    """Fill the template for `kind` from a concept record (public dict shape)."""
    template = TEMPLATES[EnrichmentKind(kind)]
    return template.format(
        name=concept.get("name", ""),
        coasterType=concept.get("coasterType", ""),
        thrillLevel=concept.get("thrillLevel", ""),
        manufacturer=concept.get("manufacturer", ""),
        layout=concept.get("layout", ""),
        theme=concept.get("theme", ""),
        elements=", ".join(concept.get("specialElements") or []),
    )
