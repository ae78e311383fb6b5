"""Tests for TableResource and ViewResource."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from dataplatform_sdk import (
    DatabaseTableProperties,
    DatabaseViewProperties,
    DataPlatformClient,
    InvalidParameterError,
)

if TYPE_CHECKING:
    from pytest_httpx import HTTPXMock

PLATFORM_URL = "https://localhost:9443"
SERVER = "cocoMDS1"
USER = "erinoverview"
INTEGRATOR_GUID = "7e3d4a1f-9b62-4c8e-a5d0-2f1b6c9e8a47"
INTEGRATOR_NAME = "ExamplePlatform"

ROOT = f"{PLATFORM_URL}/servers/{SERVER}/open-metadata/access-services/data-platform/users/{USER}"
EDIT_ROOT = f"{ROOT}/integrators/{INTEGRATOR_GUID}/{INTEGRATOR_NAME}"


@pytest.mark.asyncio
async def test_create_table(httpx_mock: HTTPXMock):
    """Test creating a table in a schema."""
    httpx_mock.add_response(json={"relatedHTTPCode": 200, "guid": "tb-1"})

    async with DataPlatformClient(PLATFORM_URL, SERVER) as client:
        guid = await client.tables.create(
            USER,
            INTEGRATOR_GUID,
            INTEGRATOR_NAME,
            DatabaseTableProperties(qualified_name="SalesDB.public.orders", aliases=["sales_orders"]),
            "sc-1",
        )

    assert guid == "tb-1"
    request = httpx_mock.get_request()
    assert str(request.url) == f"{EDIT_ROOT}/databases/schemas/sc-1/tables"
    assert json.loads(request.content) == {
        "class": "DatabaseTableProperties",
        "qualifiedName": "SalesDB.public.orders",
        "isDeprecated": False,
        "aliases": ["sales_orders"],
    }


@pytest.mark.asyncio
async def test_update_table(httpx_mock: HTTPXMock):
    httpx_mock.add_response(json={"relatedHTTPCode": 200})

    async with DataPlatformClient(PLATFORM_URL, SERVER) as client:
        await client.tables.update(
            USER,
            INTEGRATOR_GUID,
            INTEGRATOR_NAME,
            "tb-1",
            DatabaseTableProperties(qualified_name="SalesDB.public.orders", is_deprecated=True),
        )

    request = httpx_mock.get_request()
    assert str(request.url) == f"{EDIT_ROOT}/databases/schemas/tables/tb-1"
    assert json.loads(request.content)["isDeprecated"] is True


@pytest.mark.asyncio
async def test_update_table_rejects_guid_with_slash():
    async with DataPlatformClient(PLATFORM_URL, SERVER) as client:
        with pytest.raises(InvalidParameterError) as exc_info:
            await client.tables.update(
                USER,
                INTEGRATOR_GUID,
                INTEGRATOR_NAME,
                "tb/1",
                DatabaseTableProperties(qualified_name="SalesDB.public.orders"),
            )
    assert exc_info.value.parameter_name == "database_table_guid"


@pytest.mark.asyncio
async def test_get_tables_for_schema(httpx_mock: HTTPXMock):
    httpx_mock.add_response(
        json={
            "relatedHTTPCode": 200,
            "elements": [
                {
                    "elementHeader": {"guid": "tb-1", "type": {"typeName": "DatabaseTable"}},
                    "databaseTableProperties": {"qualifiedName": "SalesDB.public.orders", "isDeprecated": False},
                }
            ],
        }
    )

    async with DataPlatformClient(PLATFORM_URL, SERVER) as client:
        tables = await client.tables.get_tables_for_database_schema(USER, "sc-1")

    assert tables[0].properties.qualified_name == "SalesDB.public.orders"
    assert httpx_mock.get_request().url.path.endswith("/databases/schemas/sc-1/tables")


@pytest.mark.asyncio
async def test_create_view(httpx_mock: HTTPXMock):
    """Test creating a view in a schema."""
    httpx_mock.add_response(json={"relatedHTTPCode": 200, "guid": "vw-1"})

    async with DataPlatformClient(PLATFORM_URL, SERVER) as client:
        guid = await client.views.create(
            USER,
            INTEGRATOR_GUID,
            INTEGRATOR_NAME,
            DatabaseViewProperties(
                qualified_name="SalesDB.public.open_orders",
                expression="SELECT * FROM orders WHERE status = 'open'",
            ),
            "sc-1",
        )

    assert guid == "vw-1"
    request = httpx_mock.get_request()
    assert str(request.url) == f"{EDIT_ROOT}/databases/schemas/sc-1/tables/views"
    body = json.loads(request.content)
    assert body["class"] == "DatabaseViewProperties"
    assert body["expression"].startswith("SELECT")


@pytest.mark.asyncio
async def test_view_operations_use_view_address(httpx_mock: HTTPXMock):
    httpx_mock.add_response(json={"relatedHTTPCode": 200}, is_reusable=True)

    async with DataPlatformClient(PLATFORM_URL, SERVER) as client:
        await client.views.publish(USER, INTEGRATOR_GUID, INTEGRATOR_NAME, "vw-1")
        await client.views.remove(USER, INTEGRATOR_GUID, INTEGRATOR_NAME, "vw-1", "SalesDB.public.open_orders")

    publish, remove = httpx_mock.get_requests()
    assert str(publish.url) == f"{EDIT_ROOT}/databases/schemas/tables/views/vw-1/publish"
    assert str(remove.url) == f"{EDIT_ROOT}/databases/schemas/tables/views/vw-1/SalesDB.public.open_orders/delete"


@pytest.mark.asyncio
async def test_get_view_by_guid(httpx_mock: HTTPXMock):
    httpx_mock.add_response(
        json={
            "relatedHTTPCode": 200,
            "element": {
                "elementHeader": {"guid": "vw-1", "type": {"typeName": "DatabaseView"}},
                "databaseViewProperties": {
                    "qualifiedName": "SalesDB.public.open_orders",
                    "expression": "SELECT * FROM orders",
                },
            },
        }
    )

    async with DataPlatformClient(PLATFORM_URL, SERVER) as client:
        view = await client.views.get_by_guid(USER, "vw-1")

    assert view.properties.expression == "SELECT * FROM orders"
    assert str(httpx_mock.get_request().url) == f"{ROOT}/databases/schemas/tables/views/vw-1"


@pytest.mark.asyncio
async def test_get_views_for_schema(httpx_mock: HTTPXMock):
    httpx_mock.add_response(json={"relatedHTTPCode": 200, "elements": []})

    async with DataPlatformClient(PLATFORM_URL, SERVER) as client:
        assert await client.views.get_views_for_database_schema(USER, "sc-1") == []

    assert httpx_mock.get_request().url.path.endswith("/databases/schemas/sc-1/tables/views")
