"""
Pydantic request/response models for the concepts API (stable contract).
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from core.concept_generator import RollSet
from core.enrichment_kind import EnrichmentKind


class RollsRequest(BaseModel):
    """Six caller-supplied dice rolls (non-negative integers)."""
    typeRoll: int = Field(..., ge=0)
    thrillRoll: int = Field(..., ge=0)
    manufacturerRoll: int = Field(..., ge=0)
    layoutRoll: int = Field(..., ge=0)
    elementsRoll: int = Field(..., ge=0)
    themeRoll: int = Field(..., ge=0)

    def to_roll_set(self) -> RollSet:
        return RollSet.from_dict(self.model_dump())


class RollDiceRequest(BaseModel):
    seed: Optional[int] = Field(default=None, description="Seed for reproducible rolls")
    sides: int = Field(default=20, ge=1, le=1000)


class ConceptResponse(BaseModel):
    """Public record shape of a coaster concept."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    creationTime: Optional[str] = Field(default=None, alias="_creationTime")
    userId: str
    name: str
    coasterType: str
    thrillLevel: str
    manufacturer: str
    layout: str
    theme: str
    specialElements: List[str]
    rollData: Dict[str, int]
    isPublic: bool
    aiDescription: Optional[str] = None
    aiTheming: Optional[str] = None
    aiLayoutIdeas: Optional[str] = None


class CreatedResponse(BaseModel):
    id: str


class RolledResponse(CreatedResponse):
    rolls: Dict[str, int]


class RenameRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)


class VisibilityResponse(BaseModel):
    isPublic: bool


class AIFieldPatchRequest(BaseModel):
    kind: EnrichmentKind
    content: str


class ExpandRequest(BaseModel):
    expandType: EnrichmentKind


class ExpandResponse(BaseModel):
    content: Optional[str] = None
