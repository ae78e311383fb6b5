"""Request path construction for the data platform access service.

Every request target is derived from a :class:`ResourceKind` and an
:class:`Operation` by table lookup, then composed by :func:`request_path`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote

SERVICE_PATH = "/servers/{server_name}/open-metadata/access-services/data-platform/users/{user_id}"


@dataclass(frozen=True)
class ResourceKind:
    """One level of the database hierarchy and where it lives in the URL space."""

    type_name: str
    label: str
    plural: str
    segment: str
    parent: ResourceKind | None = None

    @property
    def segments(self) -> tuple[str, ...]:
        return tuple(self.segment.split("/"))

    @property
    def path(self) -> tuple[str, ...]:
        """Resource path shared by every element of this kind."""
        if self.parent is None:
            return self.segments
        return self.parent.path + self.segments

    def collection(self, parent_guid: str | None = None) -> tuple[str, ...]:
        """Path of the children of ``parent_guid`` (or of all top-level elements)."""
        if self.parent is None:
            return self.segments
        if parent_guid is None:
            raise ValueError(f"{self.type_name} elements are addressed through a {self.parent.type_name}")
        return (*self.parent.path, parent_guid, *self.segments)

    def element(self, guid: str) -> tuple[str, ...]:
        return (*self.path, guid)


DATABASE = ResourceKind("Database", "database", "databases", "databases")
DATABASE_SCHEMA = ResourceKind("DatabaseSchema", "database_schema", "database_schemas", "schemas", DATABASE)
DATABASE_TABLE = ResourceKind("DatabaseTable", "database_table", "database_tables", "tables", DATABASE_SCHEMA)
DATABASE_VIEW = ResourceKind("DatabaseView", "database_view", "database_views", "tables/views", DATABASE_SCHEMA)
DATABASE_COLUMN = ResourceKind("DatabaseColumn", "database_column", "database_columns", "columns", DATABASE_TABLE)
DATABASE_DERIVED_COLUMN = ResourceKind(
    "DatabaseDerivedColumn",
    "database_derived_column",
    "database_derived_columns",
    "columns/derived",
    DATABASE_TABLE,
)

RESOURCE_KINDS: dict[str, ResourceKind] = {
    kind.type_name: kind
    for kind in (DATABASE, DATABASE_SCHEMA, DATABASE_TABLE, DATABASE_VIEW, DATABASE_COLUMN, DATABASE_DERIVED_COLUMN)
}


class Anchor(str, Enum):
    KIND = "kind"
    ELEMENT = "element"
    COLLECTION = "collection"


class Operation(Enum):
    """Operation shapes: (anchor, suffix template, carries integrator identity)."""

    CREATE = (Anchor.COLLECTION, (), True)
    CREATE_FROM_TEMPLATE = (Anchor.COLLECTION, ("from-template", "{template_guid}"), True)
    UPDATE = (Anchor.ELEMENT, (), True)
    PUBLISH = (Anchor.ELEMENT, ("publish",), True)
    WITHDRAW = (Anchor.ELEMENT, ("withdraw",), True)
    REMOVE = (Anchor.ELEMENT, ("{qualified_name}", "delete"), True)
    FIND = (Anchor.KIND, ("by-search-string", "{search_string}"), False)
    GET_BY_NAME = (Anchor.KIND, ("by-name", "{name}"), False)
    GET_BY_GUID = (Anchor.ELEMENT, (), False)
    LIST_FOR_PARENT = (Anchor.COLLECTION, (), False)
    LIST_FOR_INTEGRATOR = (Anchor.KIND, ("for-integrator", "{integrator_guid}", "{integrator_name}"), False)
    SET_PRIMARY_KEY = (Anchor.ELEMENT, ("primary-key",), True)
    REMOVE_PRIMARY_KEY = (Anchor.ELEMENT, ("primary-key", "delete"), True)
    ADD_FOREIGN_KEY = (Anchor.ELEMENT, ("foreign-key", "{primary_key_column_guid}"), True)
    REMOVE_FOREIGN_KEY = (Anchor.ELEMENT, ("foreign-key", "{primary_key_column_guid}", "delete"), True)
    ADD_QUERY_TARGET = (Anchor.ELEMENT, ("query-target",), True)

    def __init__(self, anchor: Anchor, suffix: tuple[str, ...], mutating: bool):
        self.anchor = anchor
        self.suffix = suffix
        self.mutating = mutating


def resource_segments(
    kind: ResourceKind,
    operation: Operation,
    guid: str | None = None,
    **values: str,
) -> tuple[str, ...]:
    """Resolve the resource-specific part of a request path.

    Args:
        kind: Resource kind addressed by the request
        operation: Operation shape
        guid: Element GUID for element-anchored operations, parent GUID for
            collection-anchored operations of child kinds
        **values: Values for the operation suffix placeholders

    Returns:
        Unencoded path segments
    """
    if operation.anchor is Anchor.KIND:
        anchor = kind.path
    elif operation.anchor is Anchor.COLLECTION:
        anchor = kind.collection(guid)
    else:
        if guid is None:
            raise ValueError(f"{operation.name} needs the GUID of the {kind.type_name}")
        anchor = kind.element(guid)

    suffix = tuple(part.format(**values) for part in operation.suffix)
    return anchor + suffix


def request_path(
    server_name: str,
    user_id: str,
    segments: tuple[str, ...],
    integrator: tuple[str, str] | None = None,
) -> str:
    """Compose a request path.

    Placeholders are filled in a fixed order: server name, user id, integrator
    GUID and name (mutating calls only), then the resource segments. Each value
    is encoded as exactly one path segment.
    """
    parts = [SERVICE_PATH.format(server_name=_encode(server_name), user_id=_encode(user_id))]
    if integrator is not None:
        integrator_guid, integrator_name = integrator
        parts.append(f"integrators/{_encode(integrator_guid)}/{_encode(integrator_name)}")
    parts.extend(_encode(segment) for segment in segments)
    return "/".join(parts)


def build_path(
    server_name: str,
    user_id: str,
    kind: ResourceKind,
    operation: Operation,
    guid: str | None = None,
    integrator: tuple[str, str] | None = None,
    **values: str,
) -> str:
    """Build the request path for ``operation`` on ``kind``."""
    if operation.mutating and integrator is None:
        raise ValueError(f"{operation.name} requests must carry the integrator identity")
    segments = resource_segments(kind, operation, guid, **values)
    return request_path(server_name, user_id, segments, integrator if operation.mutating else None)


def _encode(value: str) -> str:
    encoded = quote(str(value), safe="")
    # "." and ".." would be collapsed as dot-segments by the HTTP client
    if encoded in (".", ".."):
        return encoded.replace(".", "%2E")
    return encoded
