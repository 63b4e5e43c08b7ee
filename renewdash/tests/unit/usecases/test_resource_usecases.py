from __future__ import annotations

import pytest

from renewdash.adapters.api_errors import ApiClientError, ApiServerError
from renewdash.domain.pagination import ListQuery
from renewdash.domain.ports import UseCaseError
from renewdash.tests.unit.helpers import FakeAdminPort
from renewdash.usecases.delete_resource import DeleteResource
from renewdash.usecases.list_resources import ListResources
from renewdash.usecases.load_lookup import LoadLookup, as_options
from renewdash.usecases.load_resource import LoadResource
from renewdash.usecases.save_resource import SaveResource


def test_list_resources_sends_query_params_and_wraps_page() -> None:
    port = FakeAdminPort()
    port.pages.append({"rows": [{"id": 1}, {"id": 2}], "pagination": {"page": 2}})
    query = ListQuery(page=2, limit=10, sort_field="name", search="acme")

    result = ListResources(port)("clients", query)

    assert port.calls_to("list_page") == [
        ("clients", {"page": "2", "limit": "10", "order_by": "name", "sort_by": "DESC", "search": "acme"})
    ]
    assert result.query == query
    assert [row["id"] for row in result.rows] == [1, 2]
    assert result.has_next_page is False


def test_list_resources_maps_failures() -> None:
    port = FakeAdminPort()
    port.failures["list_page"] = ApiServerError("x", status=503)

    with pytest.raises(UseCaseError) as info:
        ListResources(port)("clients", ListQuery())

    assert info.value.message == "Gagal memuat data klien (status: 503)"


def test_save_create_strips_read_only_fields_and_stamps_creator() -> None:
    port = FakeAdminPort()
    draft = {"id": 3, "name": "Acme", "created_date": "2025-01-01", "modified_by": "x"}

    saved = SaveResource(port)("vendors", draft, actor="rina")

    assert port.calls_to("create") == [("vendors", {"name": "Acme", "created_by": "rina"})]
    assert saved["id"] == 99


def test_save_update_stamps_modifier_and_keeps_stored_password() -> None:
    port = FakeAdminPort()

    SaveResource(port)("users", {"name": "Rina", "password": ""}, record_id=4)

    assert port.calls_to("update") == [("users", 4, {"name": "Rina", "modified_by": "Admin"})]


def test_save_read_only_resource_is_refused() -> None:
    port = FakeAdminPort()

    with pytest.raises(UseCaseError) as info:
        SaveResource(port)("roles", {"name": "x"})

    assert info.value.code == "READ_ONLY"
    assert port.calls == []


def test_save_maps_unauthorized() -> None:
    port = FakeAdminPort()
    port.failures["create"] = ApiClientError("x", status=401)

    with pytest.raises(UseCaseError) as info:
        SaveResource(port)("clients", {"name": "Acme"})

    assert info.value.code == "SESSION_EXPIRED"


def test_load_and_delete_resource() -> None:
    port = FakeAdminPort()
    port.records[("clients", 5)] = {"id": 5, "name": "Acme"}

    assert LoadResource(port)("clients", 5)["name"] == "Acme"
    DeleteResource(port)("clients", 5)

    assert port.calls_to("delete") == [("clients", 5)]


def test_delete_maps_not_found() -> None:
    port = FakeAdminPort()
    port.failures["delete"] = ApiClientError("x", status=404)

    with pytest.raises(UseCaseError) as info:
        DeleteResource(port)("services", 9)

    assert info.value.code == "NOT_FOUND"


def test_lookup_options_skip_rows_without_id() -> None:
    port = FakeAdminPort()
    port.lookups["vendors"] = [{"id": 1, "name": "Niagahoster"}, {"name": "orphan"}, {"id": "2", "name": ""}]

    rows = LoadLookup(port)("vendors")

    assert as_options(rows) == [(1, "Niagahoster"), (2, "2")]
