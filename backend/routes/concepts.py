"""
Concepts Router - CoasterForge
=============================

Endpoints:
----------
- POST   /concepts                     → generate + store a concept from six rolls
- POST   /concepts/roll                → roll dice server-side, then generate + store
- GET    /concepts/mine                → caller's latest 20 concepts ([] if anonymous)
- GET    /concepts/public              → latest 10 public concepts
- GET    /concepts/{id}                → single concept, no auth
- POST   /concepts/{id}/toggle-public  → owner flips visibility
- PATCH  /concepts/{id}/name           → owner renames
- DELETE /concepts/{id}                → owner deletes
- PATCH  /concepts/{id}/ai             → owner writes one AI field directly
- POST   /concepts/{id}/expand         → run AI enrichment for one kind

Domain errors propagate to the handlers in backend.errors.
Handlers are plain `def` because the store and the HTTP client block.
"""

from __future__ import annotations

import random
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from backend.auth import current_user_id
from backend.schemas import (
    AIFieldPatchRequest,
    ConceptResponse,
    CreatedResponse,
    ExpandRequest,
    ExpandResponse,
    RenameRequest,
    RollDiceRequest,
    RolledResponse,
    RollsRequest,
    VisibilityResponse,
)
from core.concept_generator import roll_dice
from core.concept_store import ConceptStore
from core.enrichment import EnrichmentOrchestrator

router = APIRouter(prefix="/concepts", tags=["concepts"])


# --------------------------------------------------------------------------- #
# Dependencies
# --------------------------------------------------------------------------- #

def get_store(request: Request) -> ConceptStore:
    return request.app.state.store


def get_orchestrator(request: Request) -> EnrichmentOrchestrator:
    return request.app.state.orchestrator


# --------------------------------------------------------------------------- #
# Create
# --------------------------------------------------------------------------- #

@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_concept(
    rolls: RollsRequest,
    user_id: Optional[str] = Depends(current_user_id),
    store: ConceptStore = Depends(get_store),
):
    concept_id = store.create(user_id, rolls.to_roll_set())
    return {"id": concept_id}


@router.post("/roll", response_model=RolledResponse, status_code=status.HTTP_201_CREATED)
def roll_and_create(
    body: Optional[RollDiceRequest] = None,
    user_id: Optional[str] = Depends(current_user_id),
    store: ConceptStore = Depends(get_store),
):
    body = body or RollDiceRequest()
    rng = random.Random(body.seed) if body.seed is not None else None
    rolls = roll_dice(rng, sides=body.sides)
    concept_id = store.create(user_id, rolls)
    return {"id": concept_id, "rolls": rolls.as_dict()}


# --------------------------------------------------------------------------- #
# Read
# --------------------------------------------------------------------------- #

@router.get("/mine", response_model=List[ConceptResponse])
def list_my_concepts(
    user_id: Optional[str] = Depends(current_user_id),
    store: ConceptStore = Depends(get_store),
):
    return store.list_mine(user_id)


@router.get("/public", response_model=List[ConceptResponse])
def list_public_concepts(store: ConceptStore = Depends(get_store)):
    return store.list_public()


@router.get("/{concept_id}", response_model=ConceptResponse)
def get_concept(concept_id: str, store: ConceptStore = Depends(get_store)):
    concept = store.get_by_id(concept_id)
    if concept is None:
        raise HTTPException(status_code=404, detail="Concept not found")
    return concept


# --------------------------------------------------------------------------- #
# Owner-only mutations
# --------------------------------------------------------------------------- #

@router.post("/{concept_id}/toggle-public", response_model=VisibilityResponse)
def toggle_public(
    concept_id: str,
    user_id: Optional[str] = Depends(current_user_id),
    store: ConceptStore = Depends(get_store),
):
    return {"isPublic": store.toggle_public(user_id, concept_id)}


@router.patch("/{concept_id}/name", status_code=status.HTTP_204_NO_CONTENT)
def rename_concept(
    concept_id: str,
    body: RenameRequest,
    user_id: Optional[str] = Depends(current_user_id),
    store: ConceptStore = Depends(get_store),
):
    store.rename(user_id, concept_id, body.name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{concept_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_concept(
    concept_id: str,
    user_id: Optional[str] = Depends(current_user_id),
    store: ConceptStore = Depends(get_store),
):
    store.delete(user_id, concept_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{concept_id}/ai", status_code=status.HTTP_204_NO_CONTENT)
def patch_ai_field(
    concept_id: str,
    body: AIFieldPatchRequest,
    user_id: Optional[str] = Depends(current_user_id),
    store: ConceptStore = Depends(get_store),
):
    store.patch_ai_field(user_id, concept_id, body.kind, body.content)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --------------------------------------------------------------------------- #
# AI enrichment
# --------------------------------------------------------------------------- #

@router.post("/{concept_id}/expand", response_model=ExpandResponse)
def expand_concept(
    concept_id: str,
    body: ExpandRequest,
    user_id: Optional[str] = Depends(current_user_id),
    orchestrator: EnrichmentOrchestrator = Depends(get_orchestrator),
):
    content = orchestrator.enrich(user_id, concept_id, body.expandType)
    return {"content": content}
