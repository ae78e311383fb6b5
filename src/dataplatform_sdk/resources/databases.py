"""Database resource API."""

from __future__ import annotations

from dataplatform_sdk import validation
from dataplatform_sdk.addressing import DATABASE, Operation
from dataplatform_sdk.models import DatabaseElement, DatabaseProperties
from dataplatform_sdk.resources.base import ElementResource


class DatabaseResource(ElementResource[DatabaseElement, DatabaseProperties]):
    """Database resource manager.

    Databases are the top level of the hierarchy and have no parent.
    """

    kind = DATABASE
    element_model = DatabaseElement
    properties_parameter = "database_properties"

    async def list_for_integrator(
        self,
        user_id: str,
        integrator_guid: str,
        integrator_name: str,
        start_from: int = 0,
        page_size: int = 0,
    ) -> list[DatabaseElement]:
        """Retrieve the databases attributed to an integrator.

        Args:
            user_id: Calling user
            integrator_guid: Unique identifier of the integrator
            integrator_name: Unique name of the integrator
            start_from: Paging start point
            page_size: Maximum results to return

        Returns:
            Databases created or maintained by the integrator

        Example:
            >>> databases = await client.databases.list_for_integrator(
            ...     "erinoverview", integrator_guid, "ExamplePlatform", 0, 50
            ... )
        """
        method_name = "get_databases_by_integrator"
        validation.validate_user_id(user_id, method_name)
        validation.validate_guid(integrator_guid, "integrator_guid", method_name)
        validation.validate_name(integrator_name, "integrator_name", method_name)
        page_size = self._validate_paging(start_from, page_size, method_name)

        path = self._path(
            user_id,
            Operation.LIST_FOR_INTEGRATOR,
            integrator_guid=integrator_guid,
            integrator_name=integrator_name,
        )
        return self._to_elements(await self.client.get_elements(method_name, path, start_from, page_size))
