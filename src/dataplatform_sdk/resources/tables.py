"""Database table and view resource APIs."""

from __future__ import annotations

from dataplatform_sdk.addressing import DATABASE_TABLE, DATABASE_VIEW
from dataplatform_sdk.models import (
    DatabaseTableElement,
    DatabaseTableProperties,
    DatabaseViewElement,
    DatabaseViewProperties,
)
from dataplatform_sdk.resources.base import ElementResource


class TableResource(ElementResource[DatabaseTableElement, DatabaseTableProperties]):
    """Database table resource manager. Tables belong to a database schema."""

    kind = DATABASE_TABLE
    element_model = DatabaseTableElement
    properties_parameter = "database_table_properties"

    async def get_tables_for_database_schema(
        self, user_id: str, database_schema_guid: str, start_from: int = 0, page_size: int = 0
    ) -> list[DatabaseTableElement]:
        """Retrieve the tables of a database schema."""
        return await self.list_for_parent(user_id, database_schema_guid, start_from, page_size)


class ViewResource(ElementResource[DatabaseViewElement, DatabaseViewProperties]):
    """Database view resource manager.

    A view is a table whose content comes from its ``expression``. Views live
    under a database schema and own columns just like tables do.
    """

    kind = DATABASE_VIEW
    element_model = DatabaseViewElement
    properties_parameter = "database_view_properties"

    async def get_views_for_database_schema(
        self, user_id: str, database_schema_guid: str, start_from: int = 0, page_size: int = 0
    ) -> list[DatabaseViewElement]:
        """Retrieve the views of a database schema."""
        return await self.list_for_parent(user_id, database_schema_guid, start_from, page_size)
