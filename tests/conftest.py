# tests/conftest.py
"""
Shared fixtures: a fresh in-memory database per test, the default reference
tables, and a fake `requests.Session` standing in for the text-generation API.
"""
from __future__ import annotations

from typing import Dict

import pytest

from core.concept_store import ConceptStore
from core.config import EnrichmentConfig, Settings
from database.db_setup import init_db
from database.seed import DEFAULT_REFERENCE_DATA, seed_reference_data
from tests.fakes import FAKE_API_KEY, FAKE_BASE_URL, FakeSession


@pytest.fixture
def db():
    engine = init_db("sqlite://")
    seed_reference_data()
    yield engine
    engine.dispose()


@pytest.fixture
def reference_data():
    return {k: list(v) for k, v in DEFAULT_REFERENCE_DATA.items()}


@pytest.fixture
def store(db) -> ConceptStore:
    return ConceptStore()


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def enrichment_config() -> EnrichmentConfig:
    return EnrichmentConfig(base_url=FAKE_BASE_URL, api_key=FAKE_API_KEY)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite://",
        OPENAI_BASE_URL=FAKE_BASE_URL,
        OPENAI_API_KEY=FAKE_API_KEY,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def rolls_payload() -> Dict[str, int]:
    return {
        "typeRoll": 1,
        "thrillRoll": 1,
        "manufacturerRoll": 1,
        "layoutRoll": 1,
        "elementsRoll": 1,
        "themeRoll": 1,
    }
