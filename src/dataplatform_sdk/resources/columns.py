"""Database column resource API, including derived columns and key decorations."""

from __future__ import annotations

from dataplatform_sdk import validation
from dataplatform_sdk.addressing import DATABASE_COLUMN, DATABASE_DERIVED_COLUMN, Operation, ResourceKind
from dataplatform_sdk.exceptions import InvalidParameterError
from dataplatform_sdk.models import (
    DatabaseColumnElement,
    DatabaseColumnProperties,
    DatabaseForeignKeyProperties,
    DatabasePrimaryKeyProperties,
    DatabaseQueryProperties,
    ElementProperties,
)
from dataplatform_sdk.resources.base import ElementResource


class ColumnResource(ElementResource[DatabaseColumnElement, DatabaseColumnProperties]):
    """Database column resource manager.

    Columns belong to a table or view. Derived columns share every read and
    removal operation with ordinary columns; only creation and update use the
    derived-column address. Primary and foreign keys are decorations that can
    be added and removed without touching the columns themselves.
    """

    kind = DATABASE_COLUMN
    element_model = DatabaseColumnElement
    properties_parameter = "database_column_properties"

    def _request_body(self, properties: ElementProperties, kind: ResourceKind, method_name: str) -> dict:
        # body class is fixed by the address
        if kind is DATABASE_DERIVED_COLUMN:
            return properties.to_request_body(DatabaseColumnProperties.derived_class_name)
        if isinstance(properties, DatabaseColumnProperties) and properties.is_derived:
            derived_method = method_name.replace(kind.label, DATABASE_DERIVED_COLUMN.label)
            raise InvalidParameterError(
                f"formula and queries are only accepted by {derived_method}",
                parameter_name=self.properties_parameter,
                method_name=method_name,
            )
        return properties.to_request_body()

    async def get_columns_for_database_table(
        self, user_id: str, database_table_guid: str, start_from: int = 0, page_size: int = 0
    ) -> list[DatabaseColumnElement]:
        """Retrieve the columns of a table or view."""
        return await self.list_for_parent(user_id, database_table_guid, start_from, page_size)

    async def create_derived(
        self,
        user_id: str,
        integrator_guid: str,
        integrator_name: str,
        properties: DatabaseColumnProperties,
        parent_guid: str | None = None,
    ) -> str:
        """Create a column whose value is computed from its query targets.

        Returns:
            Unique identifier of the new column
        """
        return await self._create(
            user_id, integrator_guid, integrator_name, properties, parent_guid, None, DATABASE_DERIVED_COLUMN
        )

    async def create_derived_from_template(
        self,
        user_id: str,
        integrator_guid: str,
        integrator_name: str,
        template_guid: str,
        properties: DatabaseColumnProperties,
        parent_guid: str | None = None,
    ) -> str:
        """Create a derived column seeded from an existing derived column."""
        return await self._create(
            user_id,
            integrator_guid,
            integrator_name,
            properties,
            parent_guid,
            template_guid,
            DATABASE_DERIVED_COLUMN,
        )

    async def update_derived(
        self,
        user_id: str,
        integrator_guid: str,
        integrator_name: str,
        element_guid: str,
        properties: DatabaseColumnProperties,
    ) -> None:
        """Replace the properties of a derived column."""
        await self._update(
            user_id, integrator_guid, integrator_name, element_guid, properties, DATABASE_DERIVED_COLUMN
        )

    async def add_query_target(
        self,
        user_id: str,
        integrator_guid: str,
        integrator_name: str,
        column_guid: str,
        query_properties: DatabaseQueryProperties,
    ) -> None:
        """Link a derived column to a data value used to compute it.

        Query targets keep the order in which they are added.
        """
        method_name = "add_query_target_to_derived_column"
        self._validate_editor(user_id, integrator_guid, integrator_name, method_name)
        validation.validate_guid(column_guid, "database_column_guid", method_name)
        validation.validate_object(query_properties, "database_query_properties", method_name)

        path = self._path(user_id, Operation.ADD_QUERY_TARGET, column_guid, (integrator_guid, integrator_name))
        await self.client.post(method_name, path, query_properties.to_request_body())

    async def set_primary_key(
        self,
        user_id: str,
        integrator_guid: str,
        integrator_name: str,
        column_guid: str,
        primary_key_properties: DatabasePrimaryKeyProperties,
    ) -> None:
        """Classify a column as the primary key of its table.

        Each row has a different value in a primary key column, so the value
        identifies the row.
        """
        method_name = "set_primary_key_on_column"
        self._validate_editor(user_id, integrator_guid, integrator_name, method_name)
        validation.validate_guid(column_guid, "database_column_guid", method_name)
        validation.validate_object(primary_key_properties, "database_primary_key_properties", method_name)

        path = self._path(user_id, Operation.SET_PRIMARY_KEY, column_guid, (integrator_guid, integrator_name))
        await self.client.post(method_name, path, primary_key_properties.to_request_body())

    async def remove_primary_key(
        self,
        user_id: str,
        integrator_guid: str,
        integrator_name: str,
        column_guid: str,
    ) -> None:
        """Remove the primary key classification from a column."""
        await self._action(
            Operation.REMOVE_PRIMARY_KEY,
            "remove_primary_key_from_column",
            user_id,
            integrator_guid,
            integrator_name,
            column_guid,
        )

    async def add_foreign_key(
        self,
        user_id: str,
        integrator_guid: str,
        integrator_name: str,
        primary_key_column_guid: str,
        foreign_key_column_guid: str,
        foreign_key_properties: DatabaseForeignKeyProperties,
    ) -> None:
        """Link a column holding another table's primary key to that primary key.

        Both columns are resolved by the server in a single request.
        """
        method_name = "add_foreign_key_relationship"
        self._validate_editor(user_id, integrator_guid, integrator_name, method_name)
        validation.validate_guid(primary_key_column_guid, "primary_key_column_guid", method_name)
        validation.validate_guid(foreign_key_column_guid, "foreign_key_column_guid", method_name)
        validation.validate_object(foreign_key_properties, "database_foreign_key_properties", method_name)

        path = self._path(
            user_id,
            Operation.ADD_FOREIGN_KEY,
            foreign_key_column_guid,
            (integrator_guid, integrator_name),
            primary_key_column_guid=primary_key_column_guid,
        )
        await self.client.post(method_name, path, foreign_key_properties.to_request_body())

    async def remove_foreign_key(
        self,
        user_id: str,
        integrator_guid: str,
        integrator_name: str,
        primary_key_column_guid: str,
        foreign_key_column_guid: str,
    ) -> None:
        """Remove the foreign key relationship between two columns; the columns remain."""
        method_name = "remove_foreign_key_relationship"
        self._validate_editor(user_id, integrator_guid, integrator_name, method_name)
        validation.validate_guid(primary_key_column_guid, "primary_key_column_guid", method_name)
        validation.validate_guid(foreign_key_column_guid, "foreign_key_column_guid", method_name)

        path = self._path(
            user_id,
            Operation.REMOVE_FOREIGN_KEY,
            foreign_key_column_guid,
            (integrator_guid, integrator_name),
            primary_key_column_guid=primary_key_column_guid,
        )
        await self.client.post(method_name, path)
