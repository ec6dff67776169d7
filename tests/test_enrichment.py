# tests/test_enrichment.py
"""
AI enrichment flow with a fake text-generation session.
"""
import pytest
import requests

from core.concept_generator import RollSet
from core.config import EnrichmentConfig
from core.enrichment import EnrichmentOrchestrator, TextGenerationClient, extract_content
from core.enrichment_kind import EnrichmentKind
from core.errors import EnrichmentFailed, EnrichmentNotPersisted, NotFound, NotFoundOrForbidden, Unauthenticated
from core.prompts import build_prompt
from tests.fakes import FAKE_API_KEY, FAKE_BASE_URL, FakeResponse, completion

OWNER = "owner-1"
OTHER = "someone-else"


class RecordingLog:
    def __init__(self):
        self.entries = []

    def record(self, entry):
        self.entries.append(entry)


@pytest.fixture
def concept_id(store):
    return store.create(OWNER, RollSet(1, 1, 1, 1, 1, 1))


@pytest.fixture
def activity_log():
    return RecordingLog()


@pytest.fixture
def orchestrator(store, fake_session, enrichment_config, activity_log):
    client = TextGenerationClient(enrichment_config, session=fake_session)
    return EnrichmentOrchestrator(store, client, activity_log=activity_log)


def test_description_sets_only_ai_description(orchestrator, store, concept_id, fake_session):
    fake_session.response = completion("T")

    result = orchestrator.enrich(OWNER, concept_id, EnrichmentKind.DESCRIPTION)

    concept = store.get_by_id(concept_id)
    assert result == "T"
    assert concept["aiDescription"] == "T"
    assert concept["aiTheming"] is None
    assert concept["aiLayoutIdeas"] is None


@pytest.mark.parametrize(
    "kind, field",
    [("description", "aiDescription"), ("theming", "aiTheming"), ("layout", "aiLayoutIdeas")],
)
def test_each_kind_writes_its_field(orchestrator, store, concept_id, fake_session, kind, field):
    fake_session.response = completion(f"text for {kind}")
    orchestrator.enrich(OWNER, concept_id, kind)
    assert store.get_by_id(concept_id)[field] == f"text for {kind}"


def test_request_shape(orchestrator, store, concept_id, fake_session):
    orchestrator.enrich(OWNER, concept_id, EnrichmentKind.LAYOUT)

    assert len(fake_session.calls) == 1
    call = fake_session.calls[0]
    assert call["url"] == f"{FAKE_BASE_URL}/chat/completions"
    assert call["headers"]["Authorization"] == f"Bearer {FAKE_API_KEY}"
    assert call["headers"]["Content-Type"] == "application/json"
    body = call["json"]
    assert body["model"] == "gpt-4.1-nano"
    assert body["max_tokens"] == 500
    assert body["messages"] == [
        {"role": "user", "content": build_prompt(EnrichmentKind.LAYOUT, store.get_by_id(concept_id))}
    ]


def test_prompt_embeds_concept_fields(store, concept_id):
    concept = store.get_by_id(concept_id)
    prompt = build_prompt(EnrichmentKind.THEMING, concept)

    assert prompt.startswith(f'Design detailed theming for a {concept["theme"]} themed roller coaster called "{concept["name"]}":')
    assert f'Elements: {", ".join(concept["specialElements"])}' in prompt

    description = build_prompt(EnrichmentKind.DESCRIPTION, concept)
    assert f'Manufacturer: {concept["manufacturer"]}' in description
    assert f'Thrill Level: {concept["thrillLevel"]}' in description


def test_empty_completion_reports_success_and_stores_nothing(orchestrator, store, concept_id, fake_session, activity_log):
    fake_session.response = completion(None)

    assert orchestrator.enrich(OWNER, concept_id, EnrichmentKind.DESCRIPTION) is None
    assert store.get_by_id(concept_id)["aiDescription"] is None
    assert activity_log.entries[-1]["status"] == "empty"


def test_blank_content_counts_as_empty(orchestrator, store, concept_id, fake_session):
    fake_session.response = completion("")
    assert orchestrator.enrich(OWNER, concept_id, EnrichmentKind.THEMING) is None
    assert store.get_by_id(concept_id)["aiTheming"] is None


@pytest.mark.parametrize(
    "setup",
    [
        lambda s: setattr(s, "error", requests.ConnectionError("connection refused")),
        lambda s: setattr(s, "error", requests.Timeout("timed out")),
        lambda s: setattr(s, "response", FakeResponse(status_code=500, payload={"error": "boom"})),
        lambda s: setattr(s, "response", FakeResponse(status_code=401, payload={"error": "bad key"})),
        lambda s: setattr(s, "response", FakeResponse(raise_on_json=True)),
    ],
)
def test_transport_failures_raise_and_persist_nothing(orchestrator, store, concept_id, fake_session, activity_log, setup):
    setup(fake_session)

    with pytest.raises(EnrichmentFailed):
        orchestrator.enrich(OWNER, concept_id, EnrichmentKind.DESCRIPTION)

    assert store.get_by_id(concept_id)["aiDescription"] is None
    assert activity_log.entries[-1]["status"] == "failed"


def test_missing_configuration_is_enrichment_failure(store, concept_id, fake_session):
    client = TextGenerationClient(EnrichmentConfig(), session=fake_session)
    orchestrator = EnrichmentOrchestrator(store, client)

    with pytest.raises(EnrichmentFailed):
        orchestrator.enrich(OWNER, concept_id, EnrichmentKind.DESCRIPTION)
    assert fake_session.calls == []


def test_unknown_concept_looks_like_foreign_one(orchestrator, concept_id, fake_session):
    with pytest.raises(NotFoundOrForbidden) as missing:
        orchestrator.enrich(OWNER, "missing", EnrichmentKind.DESCRIPTION)
    with pytest.raises(NotFoundOrForbidden) as foreign:
        orchestrator.enrich(OTHER, concept_id, EnrichmentKind.DESCRIPTION)

    assert type(missing.value) is type(foreign.value)
    assert str(missing.value) == str(foreign.value)
    assert fake_session.calls == []


def test_anonymous_caller_is_unauthenticated_even_for_unknown_id(orchestrator, fake_session):
    with pytest.raises(Unauthenticated):
        orchestrator.enrich(None, "missing", EnrichmentKind.DESCRIPTION)
    assert fake_session.calls == []


def test_unknown_concept_without_owner_precheck_is_not_found(store, fake_session, enrichment_config):
    client = TextGenerationClient(enrichment_config, session=fake_session)
    orchestrator = EnrichmentOrchestrator(store, client, require_owner=False)

    with pytest.raises(NotFound):
        orchestrator.enrich(None, "missing", EnrichmentKind.DESCRIPTION)
    assert fake_session.calls == []


def test_non_owner_is_rejected_before_calling_api(orchestrator, concept_id, fake_session):
    with pytest.raises(NotFoundOrForbidden):
        orchestrator.enrich(OTHER, concept_id, EnrichmentKind.DESCRIPTION)
    with pytest.raises(Unauthenticated):
        orchestrator.enrich(None, concept_id, EnrichmentKind.DESCRIPTION)
    assert fake_session.calls == []


def test_without_owner_precheck_write_back_still_guarded(store, concept_id, fake_session, enrichment_config):
    client = TextGenerationClient(enrichment_config, session=fake_session)
    orchestrator = EnrichmentOrchestrator(store, client, require_owner=False)
    fake_session.response = completion("generated for someone else")

    with pytest.raises(EnrichmentNotPersisted) as exc_info:
        orchestrator.enrich(OTHER, concept_id, EnrichmentKind.DESCRIPTION)

    assert exc_info.value.content == "generated for someone else"
    assert len(fake_session.calls) == 1
    assert store.get_by_id(concept_id)["aiDescription"] is None


def test_concept_deleted_during_generation(orchestrator, store, concept_id, fake_session, activity_log):
    fake_session.before_return = lambda: store.delete(OWNER, concept_id)
    fake_session.response = completion("lost text")

    with pytest.raises(EnrichmentNotPersisted) as exc_info:
        orchestrator.enrich(OWNER, concept_id, EnrichmentKind.DESCRIPTION)

    assert exc_info.value.content == "lost text"
    assert store.get_by_id(concept_id) is None
    assert activity_log.entries[-1]["status"] == "not_persisted"


def test_activity_log_entry_on_success(orchestrator, concept_id, activity_log):
    orchestrator.enrich(OWNER, concept_id, EnrichmentKind.THEMING)

    entry = activity_log.entries[-1]
    assert entry["status"] == "ok"
    assert entry["kind"] == "theming"
    assert entry["concept_id"] == concept_id
    assert entry["model"] == "gpt-4.1-nano"
    assert entry["error"] is None


@pytest.mark.parametrize(
    "payload",
    [
        None,
        {},
        {"choices": None},
        {"choices": []},
        {"choices": {"text": "x"}},
        {"choices": "x"},
        {"choices": [{}]},
        {"choices": [{"message": None}]},
        [1, 2],
    ],
)
def test_extract_content_tolerates_missing_levels(payload):
    assert extract_content(payload) is None


def test_malformed_choices_count_as_empty(orchestrator, store, concept_id, fake_session, activity_log):
    fake_session.response = FakeResponse(payload={"choices": {"text": "x"}})

    assert orchestrator.enrich(OWNER, concept_id, EnrichmentKind.DESCRIPTION) is None
    assert store.get_by_id(concept_id)["aiDescription"] is None
    assert activity_log.entries[-1]["status"] == "empty"
