"""Shared fixtures: an in-memory metadata server behind pytest-httpx."""

from __future__ import annotations

import json
import re
import uuid
from typing import TYPE_CHECKING, Any
from urllib.parse import unquote

import httpx
import pytest

if TYPE_CHECKING:
    from pytest_httpx import HTTPXMock

FFDC_PACKAGE = "org.odpi.openmetadata.frameworks.connectors.ffdc"

DEFAULT_ZONES = ["draft"]
PUBLISHED_ZONES = ["published"]

KIND_PATHS = {
    ("databases",): "Database",
    ("databases", "schemas"): "DatabaseSchema",
    ("databases", "schemas", "tables"): "DatabaseTable",
    ("databases", "schemas", "tables", "views"): "DatabaseView",
    ("databases", "schemas", "tables", "columns"): "DatabaseColumn",
    ("databases", "schemas", "tables", "columns", "derived"): "DatabaseDerivedColumn",
}

PARENT_KINDS = {
    "Database": (),
    "DatabaseSchema": ("Database",),
    "DatabaseTable": ("DatabaseSchema",),
    "DatabaseView": ("DatabaseSchema",),
    "DatabaseColumn": ("DatabaseTable", "DatabaseView"),
    "DatabaseDerivedColumn": ("DatabaseTable", "DatabaseView"),
}

# Kinds returned when reading through a kind's address
READ_FAMILY = {
    "DatabaseColumn": ("DatabaseColumn", "DatabaseDerivedColumn"),
    "DatabaseDerivedColumn": ("DatabaseColumn", "DatabaseDerivedColumn"),
}

PROPERTIES_KEYS = {
    "Database": "databaseProperties",
    "DatabaseSchema": "databaseSchemaProperties",
    "DatabaseTable": "databaseTableProperties",
    "DatabaseView": "databaseViewProperties",
    "DatabaseColumn": "databaseColumnProperties",
    "DatabaseDerivedColumn": "databaseColumnProperties",
}


class FakeCatalogServer:
    """Just enough of the data platform access service to run end-to-end scenarios."""

    def __init__(self) -> None:
        self.elements: dict[str, dict[str, Any]] = {}
        self.foreign_keys: dict[tuple[str, str], dict[str, Any]] = {}
        self.unauthorized_users: set[str] = set()
        self.requests: list[tuple[str, list[str]]] = []

    # -- plumbing --------------------------------------------------------------------

    def handle(self, request: httpx.Request) -> httpx.Response:
        raw_path = request.url.raw_path.decode().split("?")[0]
        segments = [unquote(s) for s in raw_path.split("/")[1:]]
        self.requests.append((request.method, segments))

        user_id = segments[6]
        rest = segments[7:]
        if user_id in self.unauthorized_users:
            return self._error(403, "UserNotAuthorizedException", f"User {user_id} is not authorized")

        integrator = None
        if rest[:1] == ["integrators"]:
            integrator = (rest[1], rest[2])
            rest = rest[3:]

        length = 0
        while length < len(rest) and tuple(rest[: length + 1]) in KIND_PATHS:
            length += 1
        kind_path = tuple(rest[:length])
        kind = KIND_PATHS[kind_path]
        tail = rest[length:]

        if request.method == "GET":
            return self._retrieve(kind, kind_path, tail, request.url.params)

        assert integrator is not None, "mutating calls carry the integrator identity"
        body = json.loads(request.content) if request.content else {}
        return self._edit(kind, kind_path, tail, body, integrator)

    def _ok(self, **fields: Any) -> httpx.Response:
        return httpx.Response(200, json={"relatedHTTPCode": 200, **fields})

    def _error(self, code: int, exception: str, message: str) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "relatedHTTPCode": code,
                "exceptionClassName": f"{FFDC_PACKAGE}.{exception}",
                "exceptionErrorMessage": message,
            },
        )

    def _invalid(self, message: str) -> httpx.Response:
        return self._error(400, "InvalidParameterException", message)

    def _child_kind(self, kind_path: tuple[str, ...], segments: list[str]) -> str | None:
        return KIND_PATHS.get(kind_path + tuple(segments)) if segments else None

    # -- retrieval -------------------------------------------------------------------

    def _retrieve(self, kind: str, kind_path: tuple[str, ...], tail: list[str], params: Any) -> httpx.Response:
        start_from = int(params.get("startFrom", 0))
        page_size = int(params.get("pageSize", 0))
        family = READ_FAMILY.get(kind, (kind,))

        if tail[:1] == ["by-search-string"]:
            pattern = re.compile(tail[1])
            matches = [
                e
                for e in self._of_kinds(family)
                if any(isinstance(v, str) and pattern.search(v) for v in e["properties"].values())
            ]
            return self._page(matches, start_from, page_size)

        if tail[:1] == ["by-name"]:
            name = tail[1]
            matches = [
                e
                for e in self._of_kinds(family)
                if name in (e["properties"].get("qualifiedName"), e["properties"].get("displayName"))
            ]
            return self._page(matches, start_from, page_size)

        if tail[:1] == ["for-integrator"]:
            matches = [e for e in self._of_kinds(family) if e["integrator"] == (tail[1], tail[2])]
            return self._page(matches, start_from, page_size)

        guid = tail[0]
        child_kind = self._child_kind(kind_path, tail[1:])
        if child_kind is not None:
            child_family = READ_FAMILY.get(child_kind, (child_kind,))
            matches = [e for e in self._of_kinds(child_family) if e["parent"] == guid]
            return self._page(matches, start_from, page_size)

        element = self.elements.get(guid)
        if element is None or element["kind"] not in family:
            return self._ok(element=None)
        return self._ok(element=self.render(element))

    def _of_kinds(self, kinds: tuple[str, ...]) -> list[dict[str, Any]]:
        return [e for e in self.elements.values() if e["kind"] in kinds]

    def _page(self, matches: list[dict[str, Any]], start_from: int, page_size: int) -> httpx.Response:
        end = None if page_size == 0 else start_from + page_size
        return self._ok(elements=[self.render(e) for e in matches[start_from:end]])

    def render(self, element: dict[str, Any]) -> dict[str, Any]:
        guid = element["guid"]
        header: dict[str, Any] = {
            "guid": guid,
            "type": {"typeName": element["kind"]},
            "zoneMembership": list(element["zones"]),
            "classifications": [],
        }
        rendered = {"elementHeader": header, PROPERTIES_KEYS[element["kind"]]: dict(element["properties"])}
        if element["kind"] in ("DatabaseColumn", "DatabaseDerivedColumn"):
            if element["primary_key"] is not None:
                header["classifications"].append(
                    {"classificationName": "PrimaryKey", "classificationProperties": element["primary_key"]}
                )
            rendered["primaryKeyProperties"] = element["primary_key"]
            rendered["foreignKeys"] = [
                {"primaryKeyColumnGuid": pk, "foreignKeyColumnGuid": fk, "properties": props}
                for (pk, fk), props in self.foreign_keys.items()
                if guid in (pk, fk)
            ]
        return rendered

    # -- editing ---------------------------------------------------------------------

    def _edit(
        self,
        kind: str,
        kind_path: tuple[str, ...],
        tail: list[str],
        body: dict[str, Any],
        integrator: tuple[str, str],
    ) -> httpx.Response:
        if not tail:
            return self._create(kind, None, None, body, integrator)
        if tail[0] == "from-template":
            return self._create(kind, None, tail[1], body, integrator)

        guid = tail[0]
        action = tail[1:]

        if not action:
            return self._update(kind, guid, body)
        if action in (["publish"], ["withdraw"]):
            element = self._existing(guid)
            if element is None:
                return self._invalid(f"Unknown element {guid}")
            element["zones"] = list(PUBLISHED_ZONES if action == ["publish"] else DEFAULT_ZONES)
            return self._ok()
        if action[0] == "primary-key":
            element = self._existing(guid)
            if element is None:
                return self._invalid(f"Unknown column {guid}")
            element["primary_key"] = None if action[1:] == ["delete"] else _strip_class(body)
            return self._ok()
        if action[0] == "foreign-key":
            primary_key_guid = action[1]
            if self._existing(guid) is None or self._existing(primary_key_guid) is None:
                return self._invalid("Both columns of a foreign key must exist")
            if action[2:] == ["delete"]:
                self.foreign_keys.pop((primary_key_guid, guid), None)
            else:
                self.foreign_keys[(primary_key_guid, guid)] = _strip_class(body)
            return self._ok()
        if action == ["query-target"]:
            element = self._existing(guid)
            if element is None:
                return self._invalid(f"Unknown column {guid}")
            element["properties"].setdefault("queries", []).append(_strip_class(body))
            return self._ok()

        child_kind = self._child_kind(kind_path, action)
        if child_kind is not None:
            return self._create(child_kind, guid, None, body, integrator)
        if len(action) > 2 and action[-2] == "from-template":
            child_kind = self._child_kind(kind_path, action[:-2])
            if child_kind is not None:
                return self._create(child_kind, guid, action[-1], body, integrator)

        if len(action) == 2 and action[1] == "delete":
            return self._remove(guid, action[0])

        return self._error(404, "PropertyServerException", f"No such operation: {tail}")

    def _existing(self, guid: str) -> dict[str, Any] | None:
        return self.elements.get(guid)

    def _create(
        self,
        kind: str,
        parent_guid: str | None,
        template_guid: str | None,
        body: dict[str, Any],
        integrator: tuple[str, str],
    ) -> httpx.Response:
        if body.get("class") != f"{kind}Properties":
            return self._invalid(f"A {kind} is created from {kind}Properties, not {body.get('class')}")
        properties = _strip_class(body)
        parent_kinds = PARENT_KINDS[kind]
        if parent_kinds:
            parent = self._existing(parent_guid)
            if parent is None or parent["kind"] not in parent_kinds:
                return self._invalid(f"Parent {parent_guid} of the new {kind} does not exist")

        if template_guid is not None:
            template = self._existing(template_guid)
            if template is None or template["kind"] != kind:
                return self._invalid(f"Template {template_guid} is not a {kind}")
            properties = {**template["properties"], **properties}

        qualified_name = properties.get("qualifiedName")
        if not qualified_name:
            return self._invalid("qualifiedName is mandatory")
        if any(
            e["properties"].get("qualifiedName") == qualified_name
            for e in self._of_kinds(READ_FAMILY.get(kind, (kind,)))
        ):
            return self._invalid(f"qualifiedName {qualified_name} is already in use")

        guid = str(uuid.uuid4())
        self.elements[guid] = {
            "guid": guid,
            "kind": kind,
            "parent": parent_guid,
            "properties": properties,
            "zones": list(DEFAULT_ZONES),
            "primary_key": None,
            "integrator": integrator,
        }
        return self._ok(guid=guid)

    def _update(self, kind: str, guid: str, body: dict[str, Any]) -> httpx.Response:
        element = self._existing(guid)
        if element is None or element["kind"] not in READ_FAMILY.get(kind, (kind,)):
            return self._invalid(f"Unknown {kind} {guid}")
        if body.get("class") != f"{kind}Properties":
            return self._invalid(f"A {kind} is updated from {kind}Properties, not {body.get('class')}")
        properties = _strip_class(body)
        properties.setdefault("queries", element["properties"].get("queries"))
        element["properties"] = {k: v for k, v in properties.items() if v is not None}
        if kind == "DatabaseDerivedColumn":
            element["kind"] = kind
        return self._ok()

    def _remove(self, guid: str, qualified_name: str) -> httpx.Response:
        element = self._existing(guid)
        if element is None:
            return self._invalid(f"Unknown element {guid}")
        if element["properties"].get("qualifiedName") != qualified_name:
            return self._invalid(f"Element {guid} is not called {qualified_name}")

        doomed = {guid}
        changed = True
        while changed:
            children = {g for g, e in self.elements.items() if e["parent"] in doomed} - doomed
            doomed |= children
            changed = bool(children)
        for g in doomed:
            del self.elements[g]
        self.foreign_keys = {k: v for k, v in self.foreign_keys.items() if not doomed.intersection(k)}
        return self._ok()


def _strip_class(body: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in body.items() if k != "class"}


@pytest.fixture
def catalog_server(httpx_mock: HTTPXMock) -> FakeCatalogServer:
    """In-memory metadata server answering every request made during the test."""
    server = FakeCatalogServer()
    httpx_mock.add_callback(server.handle, is_reusable=True, is_optional=True)
    return server
