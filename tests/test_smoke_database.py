# tests/test_smoke_database.py
"""
Quick smoke test for CoasterConcept CRUD at the query layer.
"""
import pytest

from database.queries import (
    delete_concept,
    get_concept,
    insert_concept,
    list_concepts_by_user,
    load_reference_data,
    toggle_concept_public,
    update_concept,
    upsert_reference_category,
)


def _insert(user_id="smoke-user", name="Medieval Hypercoaster"):
    return insert_concept(
        user_id=user_id,
        name=name,
        coaster_type="Hypercoaster",
        thrill_level="High Thrill",
        manufacturer="Bolliger & Mabillard",
        layout="Out and Back",
        theme="Medieval Castle",
        special_elements=["Airtime Hill", "Helix"],
        roll_data={"typeRoll": 0},
    )


def test_concept_crud_smoke(db):
    c = _insert()
    assert c.id and c.is_public is False

    assert [x.id for x in list_concepts_by_user("smoke-user")] == [c.id]
    assert get_concept(c.id).special_elements == ["Airtime Hill", "Helix"]

    updated = update_concept(c.id, name="Renamed")
    assert updated.name == "Renamed"

    assert toggle_concept_public(c.id) is True
    assert delete_concept(c.id) is True
    assert get_concept(c.id) is None
    assert delete_concept(c.id) is False


def test_owner_guard_at_query_layer(db):
    c = _insert()
    assert update_concept(c.id, owner_id="intruder", name="x") is None
    assert toggle_concept_public(c.id, owner_id="intruder") is None
    assert delete_concept(c.id, owner_id="intruder") is False
    assert get_concept(c.id).name == "Medieval Hypercoaster"


def test_update_rejects_immutable_fields(db):
    c = _insert()
    with pytest.raises(ValueError):
        update_concept(c.id, user_id="someone-else")
    with pytest.raises(ValueError):
        update_concept(c.id, coaster_type="Bobsled")


def test_reference_upsert(db):
    assert upsert_reference_category("types", ["Bobsled"], overwrite=False) is False
    assert load_reference_data()["types"][0] == "Hypercoaster"

    assert upsert_reference_category("types", ["Bobsled"]) is True
    assert load_reference_data()["types"] == ["Bobsled"]

    assert upsert_reference_category("colors", ["Red", "Blue"], overwrite=False) is True
    assert load_reference_data()["colors"] == ["Red", "Blue"]
