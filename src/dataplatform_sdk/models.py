"""Metadata element and properties models.

The catalog server speaks camelCase JSON; models expose snake_case attributes
and accept either form on input.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CatalogModel(BaseModel):
    """Base model using the server's camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class ElementProperties(CatalogModel):
    """Properties common to every referenceable element."""

    class_name: ClassVar[str] = "ReferenceableProperties"

    qualified_name: str | None = None
    display_name: str | None = None
    description: str | None = None
    additional_properties: dict[str, str] | None = None
    vendor_properties: dict[str, str] | None = None
    type_name: str | None = None
    extended_properties: dict[str, Any] | None = None

    def to_request_body(self, class_name: str | None = None) -> dict[str, Any]:
        """Serialize for a write request, tagged with the properties class."""
        return {"class": class_name or self.class_name, **self.model_dump(by_alias=True, exclude_none=True)}


class DatabaseProperties(ElementProperties):
    class_name: ClassVar[str] = "DatabaseProperties"

    owner: str | None = None
    database_type: str | None = None
    database_version: str | None = None
    database_instance: str | None = None
    database_imported_from: str | None = None
    encoding_type: str | None = None
    encoding_language: str | None = None


class DatabaseSchemaProperties(ElementProperties):
    class_name: ClassVar[str] = "DatabaseSchemaProperties"

    owner: str | None = None


class DatabaseTableProperties(ElementProperties):
    class_name: ClassVar[str] = "DatabaseTableProperties"

    is_deprecated: bool = False
    aliases: list[str] | None = None


class DatabaseViewProperties(DatabaseTableProperties):
    """A table whose content is defined by a query."""

    class_name: ClassVar[str] = "DatabaseViewProperties"

    expression: str | None = None


class DatabaseQueryProperties(CatalogModel):
    """Query target used to compute a derived column."""

    class_name: ClassVar[str] = "DatabaseQueryProperties"

    query_id: str | None = None
    query: str | None = None
    query_target_guid: str | None = None

    def to_request_body(self) -> dict[str, Any]:
        return {"class": self.class_name, **self.model_dump(by_alias=True, exclude_none=True)}


class DatabaseColumnProperties(ElementProperties):
    """Column properties.

    The same model describes derived columns. Formula and query targets are
    only accepted at the derived-column address, which tags the request body
    with ``derived_class_name``.
    """

    class_name: ClassVar[str] = "DatabaseColumnProperties"
    derived_class_name: ClassVar[str] = "DatabaseDerivedColumnProperties"

    data_type: str | None = None
    position: int | None = None
    min_cardinality: int | None = None
    max_cardinality: int | None = None
    allows_duplicate_values: bool | None = None
    ordered_values: bool | None = None
    default_value_override: str | None = None
    minimum_length: int | None = None
    length: int | None = None
    significant_digits: int | None = None
    is_nullable: bool | None = None
    is_deprecated: bool = False
    aliases: list[str] | None = None
    formula: str | None = None
    queries: list[DatabaseQueryProperties] | None = None

    @property
    def is_derived(self) -> bool:
        return bool(self.formula or self.queries)


class KeyPattern(str, Enum):
    LOCAL_KEY = "LOCAL_KEY"
    RECYCLED_KEY = "RECYCLED_KEY"
    NATURAL_KEY = "NATURAL_KEY"
    MIRROR_KEY = "MIRROR_KEY"
    AGGREGATE_KEY = "AGGREGATE_KEY"
    CALLERS_KEY = "CALLERS_KEY"
    STABLE_KEY = "STABLE_KEY"
    OTHER = "OTHER"


class DatabasePrimaryKeyProperties(CatalogModel):
    class_name: ClassVar[str] = "DatabasePrimaryKeyProperties"

    name: str | None = None
    key_pattern: KeyPattern = KeyPattern.LOCAL_KEY

    def to_request_body(self) -> dict[str, Any]:
        return {"class": self.class_name, **self.model_dump(by_alias=True, exclude_none=True, mode="json")}


class DatabaseForeignKeyProperties(CatalogModel):
    class_name: ClassVar[str] = "DatabaseForeignKeyProperties"

    name: str | None = None
    description: str | None = None
    confidence: int | None = None
    steward: str | None = None
    source: str | None = None

    def to_request_body(self) -> dict[str, Any]:
        return {"class": self.class_name, **self.model_dump(by_alias=True, exclude_none=True)}


class ElementType(CatalogModel):
    type_name: str
    type_id: str | None = None
    super_type_names: list[str] | None = None


class ElementClassification(CatalogModel):
    classification_name: str
    classification_properties: dict[str, Any] | None = None


class ElementHeader(CatalogModel):
    """Identity and housekeeping of a metadata element."""

    guid: str
    type: ElementType | None = None
    zone_membership: list[str] = Field(default_factory=list)
    classifications: list[ElementClassification] = Field(default_factory=list)


class MetadataElement(CatalogModel):
    element_header: ElementHeader

    @property
    def guid(self) -> str:
        return self.element_header.guid


class DatabaseElement(MetadataElement):
    properties: DatabaseProperties = Field(alias="databaseProperties")


class DatabaseSchemaElement(MetadataElement):
    properties: DatabaseSchemaProperties = Field(alias="databaseSchemaProperties")


class DatabaseTableElement(MetadataElement):
    properties: DatabaseTableProperties = Field(alias="databaseTableProperties")


class DatabaseViewElement(MetadataElement):
    properties: DatabaseViewProperties = Field(alias="databaseViewProperties")


class DatabaseForeignKeyLink(CatalogModel):
    """A foreign key relationship as seen from one of its columns."""

    primary_key_column_guid: str
    foreign_key_column_guid: str
    properties: DatabaseForeignKeyProperties | None = None


class DatabaseColumnElement(MetadataElement):
    properties: DatabaseColumnProperties = Field(alias="databaseColumnProperties")
    primary_key_properties: DatabasePrimaryKeyProperties | None = None
    foreign_keys: list[DatabaseForeignKeyLink] = Field(default_factory=list)

    @property
    def is_primary_key(self) -> bool:
        return self.primary_key_properties is not None
