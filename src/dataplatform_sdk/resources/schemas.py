"""Database schema resource API."""

from __future__ import annotations

from dataplatform_sdk.addressing import DATABASE_SCHEMA
from dataplatform_sdk.models import DatabaseSchemaElement, DatabaseSchemaProperties
from dataplatform_sdk.resources.base import ElementResource


class SchemaResource(ElementResource[DatabaseSchemaElement, DatabaseSchemaProperties]):
    """Database schema resource manager. Each schema belongs to one database."""

    kind = DATABASE_SCHEMA
    element_model = DatabaseSchemaElement
    properties_parameter = "database_schema_properties"

    async def get_schemas_for_database(
        self, user_id: str, database_guid: str, start_from: int = 0, page_size: int = 0
    ) -> list[DatabaseSchemaElement]:
        """Retrieve the schemas hosted by a database."""
        return await self.list_for_parent(user_id, database_guid, start_from, page_size)
