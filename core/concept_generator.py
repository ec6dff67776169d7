"""
core/concept_generator.py
-------------------------

Pure dice-roll generator for roller-coaster concepts.

This module must remain storage-agnostic and pure:
- Input: six non-negative integer rolls + {category: items} reference data
- Output: GeneratedConcept (no ids, no timestamps, no randomness of its own)

Used by core.concept_store.ConceptStore.create.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

# Fallback value per singular category when the reference list is absent or empty
FALLBACKS: Dict[str, str] = {
    "types": "Hypercoaster",
    "thrillLevels": "High Thrill",
    "manufacturers": "Bolliger & Mabillard",
    "layouts": "Out and Back",
    "themes": "Medieval Castle",
}

ELEMENT_STRIDE = 7
# Probing stops after this many passes over the elements list. A list whose
# length shares a factor with the stride (7, 14, ...) only ever visits
# len / gcd(len, 7) indices, so it can yield fewer than element_count()
# distinct elements even when the list holds enough of them.
ELEMENT_PROBE_FACTOR = 3


@dataclass(frozen=True)
class RollSet:
    type_roll: int
    thrill_roll: int
    manufacturer_roll: int
    layout_roll: int
    elements_roll: int
    theme_roll: int

    def __post_init__(self):
        for name, value in self._items():
            # bool is an int subclass; a True roll is a caller bug
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    def _items(self) -> List[Tuple[str, int]]:
        return [
            ("typeRoll", self.type_roll),
            ("thrillRoll", self.thrill_roll),
            ("manufacturerRoll", self.manufacturer_roll),
            ("layoutRoll", self.layout_roll),
            ("elementsRoll", self.elements_roll),
            ("themeRoll", self.theme_roll),
        ]

    def as_dict(self) -> Dict[str, int]:
        """camelCase rollData shape stored with the concept."""
        return dict(self._items())

    @classmethod
    def from_dict(cls, data: Mapping[str, int]) -> "RollSet":
        return cls(
            type_roll=data["typeRoll"],
            thrill_roll=data["thrillRoll"],
            manufacturer_roll=data["manufacturerRoll"],
            layout_roll=data["layoutRoll"],
            elements_roll=data["elementsRoll"],
            theme_roll=data["themeRoll"],
        )


@dataclass(frozen=True)
class GeneratedConcept:
    name: str
    coaster_type: str
    thrill_level: str
    manufacturer: str
    layout: str
    theme: str
    special_elements: Tuple[str, ...]
    roll_data: Dict[str, int] = field(default_factory=dict)


def _pick(reference_data: Mapping[str, Sequence[str]], category: str, roll: int) -> str:
    items = reference_data.get(category) or []
    if not items:
        return FALLBACKS[category]
    return items[roll % len(items)]


def element_count(elements_roll: int) -> int:
    """2, 3 or 4 elements depending on the roll."""
    return 2 + (elements_roll % 3)


def select_elements(elements: Sequence[str], elements_roll: int) -> List[str]:
    """
    Probe `elements` at (elements_roll + i*7) % len for i = 0, 1, ... and keep
    distinct hits until element_count(elements_roll) are collected.

    The probe is capped at ELEMENT_PROBE_FACTOR * len(elements) steps; a list
    with too few distinct entries yields fewer elements instead of looping.
    """
    if not elements:
        return []
    target = element_count(elements_roll)
    chosen: List[str] = []
    max_probes = ELEMENT_PROBE_FACTOR * len(elements)
    for i in range(max_probes):
        if len(chosen) >= target:
            break
        element = elements[(elements_roll + i * ELEMENT_STRIDE) % len(elements)]
        if element not in chosen:
            chosen.append(element)
    return chosen


def concept_name(theme: str, coaster_type: str) -> str:
    words = theme.split()
    first = words[0] if words else ""
    return f"{first} {coaster_type}"


def generate(rolls: RollSet, reference_data: Mapping[str, Sequence[str]]) -> GeneratedConcept:
    """
    Resolve a roll set against a reference snapshot.

    Parameters
    ----------
    rolls : RollSet
        The six caller-supplied rolls.
    reference_data : mapping
        {category: ordered items}, e.g. as returned by database.queries.load_reference_data().

    Returns
    -------
    GeneratedConcept
        Deterministic for identical rolls and snapshot.
    """
    coaster_type = _pick(reference_data, "types", rolls.type_roll)
    thrill_level = _pick(reference_data, "thrillLevels", rolls.thrill_roll)
    manufacturer = _pick(reference_data, "manufacturers", rolls.manufacturer_roll)
    layout = _pick(reference_data, "layouts", rolls.layout_roll)
    theme = _pick(reference_data, "themes", rolls.theme_roll)

    special_elements = select_elements(reference_data.get("elements") or [], rolls.elements_roll)

    return GeneratedConcept(
        name=concept_name(theme, coaster_type),
        coaster_type=coaster_type,
        thrill_level=thrill_level,
        manufacturer=manufacturer,
        layout=layout,
        theme=theme,
        special_elements=tuple(special_elements),
        roll_data=rolls.as_dict(),
    )


def roll_dice(rng: Optional[random.Random] = None, sides: int = 20) -> RollSet:
    """Roll six dice in [0, sides). Pass a seeded Random for reproducible rolls."""
    if sides < 1:
        raise ValueError("sides must be >= 1")
    rng = rng or random.Random()
    return RollSet(*(rng.randrange(sides) for _ in range(6)))
