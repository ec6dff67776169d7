# database/seed.py
"""
Default reference tables for the dice-roll generator.

In production these categories are maintained by an admin process; the
defaults below let a fresh local database (and the test-suite) generate
concepts straight away.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from core.logging_config import get_logger

from .queries import upsert_reference_category

logger = get_logger("database")

DEFAULT_REFERENCE_DATA: Dict[str, List[str]] = {
    "types": [
        "Hypercoaster",
        "Giga Coaster",
        "Strata Coaster",
        "Inverted Coaster",
        "Flying Coaster",
        "Wing Coaster",
        "Dive Coaster",
        "Launched Coaster",
        "Wooden Coaster",
        "Hybrid Coaster",
        "Spinning Coaster",
        "Family Coaster",
    ],
    "thrillLevels": [
        "Family Friendly",
        "Moderate Thrill",
        "High Thrill",
        "Extreme Thrill",
    ],
    "manufacturers": [
        "Bolliger & Mabillard",
        "Intamin",
        "Rocky Mountain Construction",
        "Vekoma",
        "Mack Rides",
        "Gerstlauer",
        "Great Coasters International",
        "Zamperla",
    ],
    "layouts": [
        "Out and Back",
        "Twister",
        "Figure Eight",
        "Terrain Following",
        "Shuttle",
        "Multi-Launch Circuit",
    ],
    "themes": [
        "Medieval Castle",
        "Deep Space Exploration",
        "Haunted Mine",
        "Jungle Expedition",
        "Steampunk Factory",
        "Arctic Research Base",
        "Ancient Egyptian Tomb",
        "Pirate Cove",
        "Dragon's Lair",
        "Neon Cyber City",
    ],
    "elements": [
        "Vertical Loop",
        "Zero-G Roll",
        "Cobra Roll",
        "Immelmann",
        "Dive Loop",
        "Corkscrew",
        "Heartline Roll",
        "Airtime Hill",
        "Stengel Dive",
        "Outward Banked Airtime",
        "Top Hat",
        "Double Down",
        "Helix",
        "Wave Turn",
        "Tunnel Launch",
        "Beyond-Vertical Drop",
    ],
}


def seed_reference_data(
    data: Optional[Dict[str, List[str]]] = None,
    *,
    overwrite: bool = False,
) -> int:
    """
    Insert the reference categories that are missing from the database.

    With overwrite=True existing categories are replaced as well.
    Returns the number of categories written.
    """
    written = 0
    for category, items in (data or DEFAULT_REFERENCE_DATA).items():
        if upsert_reference_category(category, items, overwrite=overwrite):
            written += 1
    if written:
        logger.info("[Database] Seeded %d reference categories.", written)
    return written
