import json

import pytest

from entity_admin.state import (
    ACTIVE_SECTION_KEY,
    DEFAULT_SECTION,
    SECTIONS,
    AppState,
    JsonFileStore,
    MemoryStore,
)


def test_sixteen_sections_in_menu_order():
    ids = [section.id for section in SECTIONS]
    assert len(ids) == 16
    assert ids[:2] == ["locations-create", "locations-manage"]
    assert ids[-2:] == ["branch-hours-create", "branch-hours-manage"]
    assert {section.resource.key for section in SECTIONS if section.id.startswith("branches-")} == {"entity-branches"}


def test_default_section_when_nothing_saved(store):
    state = AppState(store)
    assert state.active_section == DEFAULT_SECTION
    assert state.active.label == "Create Location"
    assert state.active.is_manage is False


def test_saved_section_is_restored():
    state = AppState(MemoryStore({ACTIVE_SECTION_KEY: "users-manage"}))
    assert state.active_section == "users-manage"
    assert state.active.resource.key == "users"
    assert state.active.description == "View and manage records"


def test_unknown_saved_section_falls_back_to_default():
    state = AppState(MemoryStore({ACTIVE_SECTION_KEY: "reports"}))
    assert state.active_section == DEFAULT_SECTION


def test_select_persists(store):
    state = AppState(store)
    section = state.select("entities-manage")

    assert section.id == "entities-manage"
    assert store.get(ACTIVE_SECTION_KEY) == "entities-manage"
    assert AppState(store).active_section == "entities-manage"


def test_select_unknown_section(store):
    state = AppState(store)
    with pytest.raises(KeyError):
        state.select("nowhere")
    assert store.get(ACTIVE_SECTION_KEY) is None
    assert state.active_section == DEFAULT_SECTION


def test_form_success_changes_view_key(store):
    state = AppState(store)
    before = state.view_key
    assert state.form_succeeded() == 1
    assert state.view_key != before
    assert state.view_key == "locations-create-1"


def test_json_file_store_round_trip(tmp_path):
    path = tmp_path / "nested" / "state.json"
    store = JsonFileStore(path)

    assert store.get(ACTIVE_SECTION_KEY) is None
    store.set(ACTIVE_SECTION_KEY, "branch-hours-create")
    store.set("other", "value")

    assert json.loads(path.read_text(encoding="utf-8")) == {
        ACTIVE_SECTION_KEY: "branch-hours-create",
        "other": "value",
    }
    assert JsonFileStore(path).get(ACTIVE_SECTION_KEY) == "branch-hours-create"


def test_json_file_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileStore(path)

    assert store.get(ACTIVE_SECTION_KEY) is None
    store.set(ACTIVE_SECTION_KEY, "users-create")
    assert store.get(ACTIVE_SECTION_KEY) == "users-create"
