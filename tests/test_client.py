import pytest
import requests
from pydantic import ValidationError

from entity_admin.client import ApiClient, ApiError, ApiService
from entity_admin.core.config import Settings
from entity_admin.schemas import EntityRead, EntityStatusRead, LocationCreate, LocationRead

from conftest import BASE_URL, make_response
from samples import ENTITY, LOCATION


def test_get_all_returns_records_with_unique_ids(registry, backend):
    backend.seed("locations", {**LOCATION, "name": "Beira"}, {**LOCATION, "name": "Nampula"})
    registry.location_service.create(LOCATION)
    registry.location_service.create({**LOCATION, "name": "Tete"})

    records = registry.location_service.get_all()

    ids = [record.id for record in records]
    assert len(records) == 4
    assert len(set(ids)) == len(ids)
    assert all(isinstance(record, LocationRead) for record in records)


def test_create_then_get_all_includes_new_record(registry):
    service = registry.location_service
    created = service.create(LOCATION)

    assert created.name == "Maputo"
    assert created.id in [record.id for record in service.get_all()]


def test_create_accepts_model_instance(registry, backend):
    created = registry.location_service.create(LocationCreate(name="Inhambane"))

    assert created.name == "Inhambane"
    method, path, payload = backend.calls[-1]
    assert (method, path) == ("POST", "/api/locations")
    assert payload == {
        "parent_id": None,
        "name": "Inhambane",
        "is_province": False,
        "is_capital_city": False,
        "is_municipality": False,
        "is_active": True,
    }


def test_create_never_sends_identifier(registry, backend):
    created = registry.location_service.create({**LOCATION, "id": 99})

    assert "id" not in backend.calls[-1][2]
    assert created.id != 99


def test_create_validates_before_sending(registry, backend):
    with pytest.raises(ValidationError):
        registry.location_service.create({"name": "   "})
    assert backend.calls == []


def test_create_fills_creation_timestamp(registry, backend):
    created = registry.entity_service.create(ENTITY)

    payload = backend.calls[-1][2]
    assert payload["createdon"].endswith("Z")
    assert isinstance(created, EntityRead)
    assert created.createdon == payload["createdon"]


def test_update_sends_only_given_fields_and_keeps_the_rest(registry, backend):
    service = registry.location_service
    created = service.create(LOCATION)

    updated = service.update(created.id, {"is_active": False})
    fetched = service.get_by_id(created.id)

    assert backend.calls[-2] == ("PUT", f"/api/locations/{created.id}", {"is_active": False})
    assert updated.is_active is False
    assert fetched.is_active is False
    assert fetched.name == "Maputo"
    assert fetched.is_province is True
    assert fetched.is_capital_city is True


def test_update_refetches_when_backend_returns_no_body(registry, backend):
    backend.seed("locations", {**LOCATION, "id": 5})
    backend.override = make_response(204)

    record = registry.location_service.update(5, {"name": "Matola"})

    assert [call[0] for call in backend.calls] == ["PUT", "GET"]
    assert record.id == 5


def test_delete_then_get_all_excludes_record(registry):
    service = registry.location_service
    keep = service.create(LOCATION)
    gone = service.create({**LOCATION, "name": "Xai-Xai"})

    assert service.delete(gone.id) is None

    ids = [record.id for record in service.get_all()]
    assert gone.id not in ids
    assert keep.id in ids


def test_failed_create_leaves_records_unchanged(registry, backend):
    service = registry.location_service
    service.create(LOCATION)
    before = [record.model_dump() for record in service.get_all()]

    backend.fail_next = requests.ConnectionError("connection refused")
    with pytest.raises(ApiError) as excinfo:
        service.create({**LOCATION, "name": "Quelimane"})

    assert excinfo.value.status_code is None
    assert excinfo.value.method == "POST"
    assert [record.model_dump() for record in service.get_all()] == before


def test_server_error_raises_with_status_and_detail(registry, backend):
    backend.fail_next = 500

    with pytest.raises(ApiError) as excinfo:
        registry.user_service.get_all()

    assert excinfo.value.status_code == 500
    assert excinfo.value.message == "Internal error"
    assert str(excinfo.value) == "500: Internal error"


def test_missing_record_propagates_not_found(registry):
    with pytest.raises(ApiError) as excinfo:
        registry.entity_service.get_by_id(42)

    assert excinfo.value.status_code == 404
    assert excinfo.value.message == "Record not found"
    assert excinfo.value.url == f"{BASE_URL}/entities/42"


def test_plain_text_error_body_is_used_as_message(registry, backend):
    backend.override = make_response(502, "Bad gateway")

    with pytest.raises(ApiError) as excinfo:
        registry.location_service.get_all()

    assert excinfo.value.status_code == 502
    assert excinfo.value.message == "Bad gateway"


def test_wrapped_collection_is_unwrapped(registry, backend):
    backend.override = make_response(200, {"data": [{"id": 1, "name": "Activa"}]})

    records = registry.entity_status_service.get_all()

    assert records == [EntityStatusRead(id=1, name="Activa")]


def test_non_list_collection_is_treated_as_empty(registry, backend):
    backend.override = make_response(200, {"message": "ok"})

    assert registry.entity_status_service.get_all() == []


def test_unexpected_record_shape_raises(registry, backend):
    backend.override = make_response(200, [{"id": "not-a-number"}])

    with pytest.raises(ApiError):
        registry.location_service.get_all()


def test_invalid_json_raises(registry, backend):
    backend.override = make_response(200, "<html>oops</html>")

    with pytest.raises(ApiError) as excinfo:
        registry.location_service.get_all()

    assert excinfo.value.status_code == 200


def test_api_key_is_sent_as_bearer_token(backend):
    client = ApiClient(base_url=BASE_URL + "/", api_key="tok3n", session=backend)
    service = ApiService(client, "locations", LocationRead)

    service.get_all()

    assert backend.calls[-1][1] == "/api/locations"
    assert backend.last_headers["Authorization"] == "Bearer tok3n"
    assert backend.last_headers["Content-Type"] == "application/json"


def test_service_without_schemas_sends_mappings_unchanged(client, backend):
    service = ApiService(client, "/entity-types/", EntityStatusRead)

    service.create({"id": 3, "name": "Cooperativa", "extra": 1})

    assert backend.calls[-1] == ("POST", "/api/entity-types", {"name": "Cooperativa", "extra": 1})


def test_client_from_settings(backend):
    config = Settings(base_url="http://backend:3001/api/", api_key="k", request_timeout=0)

    client = ApiClient.from_settings(config, session=backend)

    assert client.base_url == "http://backend:3001/api"
    assert client.timeout is None
    assert client.api_key == "k"
