"""Operation set shared by every level of the database hierarchy."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

from dataplatform_sdk import validation
from dataplatform_sdk.addressing import Operation, ResourceKind, build_path
from dataplatform_sdk.exceptions import InvalidParameterError
from dataplatform_sdk.models import ElementProperties, MetadataElement

if TYPE_CHECKING:
    from dataplatform_sdk.client import DataPlatformClient

logger = logging.getLogger(__name__)

ElementT = TypeVar("ElementT", bound=MetadataElement)
PropertiesT = TypeVar("PropertiesT", bound=ElementProperties)


class ElementResource(Generic[ElementT, PropertiesT]):
    """Create, clone, update, publish, withdraw, remove and search one resource kind.

    Subclasses bind ``kind`` and ``element_model``. Every operation validates
    its arguments before building the request path, so an invalid call never
    reaches the server.
    """

    kind: ClassVar[ResourceKind]
    element_model: ClassVar[type[MetadataElement]]
    properties_parameter: ClassVar[str] = "properties"

    def __init__(self, client: DataPlatformClient):
        self.client = client

    @property
    def element_parameter(self) -> str:
        return f"{self.kind.label}_guid"

    @property
    def parent_parameter(self) -> str:
        parent = self.kind.parent
        return f"{parent.label}_guid" if parent else "parent_guid"

    def _path(
        self,
        user_id: str,
        operation: Operation,
        guid: str | None = None,
        integrator: tuple[str, str] | None = None,
        kind: ResourceKind | None = None,
        **values: str,
    ) -> str:
        return build_path(
            self.client.server_name,
            user_id,
            kind or self.kind,
            operation,
            guid,
            integrator,
            **values,
        )

    def _validate_editor(self, user_id: str, integrator_guid: str, integrator_name: str, method_name: str) -> None:
        validation.validate_user_id(user_id, method_name)
        validation.validate_guid(integrator_guid, "integrator_guid", method_name)
        validation.validate_name(integrator_name, "integrator_name", method_name)

    def _validate_parent(self, parent_guid: str | None, method_name: str, kind: ResourceKind | None = None) -> None:
        kind = kind or self.kind
        if kind.parent is not None:
            validation.validate_guid(parent_guid, self.parent_parameter, method_name)
        elif parent_guid is not None:
            raise InvalidParameterError(
                f"{kind.type_name} elements have no parent; {method_name} does not accept parent_guid",
                parameter_name="parent_guid",
                method_name=method_name,
            )

    def _validate_properties(self, properties: ElementProperties | None, method_name: str) -> None:
        validation.validate_object(properties, self.properties_parameter, method_name)
        if not isinstance(properties, ElementProperties):
            raise InvalidParameterError(
                f"{self.properties_parameter} must be a properties model, not {type(properties).__name__}",
                parameter_name=self.properties_parameter,
                method_name=method_name,
            )
        validation.validate_name(properties.qualified_name, "qualified_name", method_name)

    def _request_body(self, properties: ElementProperties, kind: ResourceKind, method_name: str) -> dict:
        return properties.to_request_body()

    def _validate_paging(self, start_from: int, page_size: int, method_name: str) -> int:
        return validation.validate_paging(start_from, page_size, method_name, self.client.max_page_size)

    def _to_elements(self, elements: list[dict]) -> list[ElementT]:
        return [self.element_model.model_validate(item) for item in elements]  # type: ignore[misc]

    async def _create(
        self,
        user_id: str,
        integrator_guid: str,
        integrator_name: str,
        properties: ElementProperties,
        parent_guid: str | None,
        template_guid: str | None,
        kind: ResourceKind,
    ) -> str:
        if template_guid is None:
            operation = Operation.CREATE
            method_name = f"create_{kind.label}"
        else:
            operation = Operation.CREATE_FROM_TEMPLATE
            method_name = f"create_{kind.label}_from_template"

        self._validate_editor(user_id, integrator_guid, integrator_name, method_name)
        if template_guid is not None:
            validation.validate_guid(template_guid, "template_guid", method_name)
        self._validate_parent(parent_guid, method_name, kind)
        self._validate_properties(properties, method_name)
        body = self._request_body(properties, kind, method_name)

        values = {"template_guid": template_guid} if template_guid is not None else {}
        path = self._path(user_id, operation, parent_guid, (integrator_guid, integrator_name), kind, **values)
        guid = await self.client.post_for_guid(method_name, path, body)
        logger.debug(f"{method_name}: created {kind.type_name} {guid}")
        return guid

    async def create(
        self,
        user_id: str,
        integrator_guid: str,
        integrator_name: str,
        properties: PropertiesT,
        parent_guid: str | None = None,
    ) -> str:
        """Create a new element.

        Args:
            user_id: Calling user
            integrator_guid: Unique identifier of the integrator creating the element
            integrator_name: Unique name of the integrator creating the element
            properties: Properties of the new element (``qualified_name`` is mandatory)
            parent_guid: Unique identifier of the parent element (required for child kinds)

        Returns:
            Unique identifier of the new element
        """
        return await self._create(
            user_id, integrator_guid, integrator_name, properties, parent_guid, None, self.kind
        )

    async def create_from_template(
        self,
        user_id: str,
        integrator_guid: str,
        integrator_name: str,
        template_guid: str,
        properties: PropertiesT,
        parent_guid: str | None = None,
    ) -> str:
        """Create a new element seeded from an existing element of the same kind.

        The template's properties are copied and overlaid with ``properties``,
        which must carry a new ``qualified_name``.

        Returns:
            Unique identifier of the new element
        """
        return await self._create(
            user_id, integrator_guid, integrator_name, properties, parent_guid, template_guid, self.kind
        )

    async def _update(
        self,
        user_id: str,
        integrator_guid: str,
        integrator_name: str,
        element_guid: str,
        properties: ElementProperties,
        kind: ResourceKind,
    ) -> None:
        method_name = f"update_{kind.label}"
        self._validate_editor(user_id, integrator_guid, integrator_name, method_name)
        validation.validate_guid(element_guid, f"{kind.label}_guid", method_name)
        self._validate_properties(properties, method_name)
        body = self._request_body(properties, kind, method_name)

        path = self._path(user_id, Operation.UPDATE, element_guid, (integrator_guid, integrator_name), kind)
        await self.client.post(method_name, path, body)

    async def update(
        self,
        user_id: str,
        integrator_guid: str,
        integrator_name: str,
        element_guid: str,
        properties: PropertiesT,
    ) -> None:
        """Replace the properties of an element; its GUID and relationships are preserved."""
        await self._update(user_id, integrator_guid, integrator_name, element_guid, properties, self.kind)

    async def _action(
        self,
        operation: Operation,
        method_name: str,
        user_id: str,
        integrator_guid: str,
        integrator_name: str,
        element_guid: str,
    ) -> None:
        self._validate_editor(user_id, integrator_guid, integrator_name, method_name)
        validation.validate_guid(element_guid, self.element_parameter, method_name)

        path = self._path(user_id, operation, element_guid, (integrator_guid, integrator_name))
        await self.client.post(method_name, path)

    async def publish(self, user_id: str, integrator_guid: str, integrator_name: str, element_guid: str) -> None:
        """Move the element into the published zones so it is visible to consumers."""
        await self._action(
            Operation.PUBLISH, f"publish_{self.kind.label}", user_id, integrator_guid, integrator_name, element_guid
        )

    async def withdraw(self, user_id: str, integrator_guid: str, integrator_name: str, element_guid: str) -> None:
        """Return the element to the default zones so it is no longer visible to consumers."""
        await self._action(
            Operation.WITHDRAW, f"withdraw_{self.kind.label}", user_id, integrator_guid, integrator_name, element_guid
        )

    async def remove(
        self,
        user_id: str,
        integrator_guid: str,
        integrator_name: str,
        element_guid: str,
        qualified_name: str,
    ) -> None:
        """Remove an element.

        ``qualified_name`` must be the name the caller believes is attached to
        ``element_guid``; the server refuses the removal when they differ.
        """
        method_name = f"remove_{self.kind.label}"
        self._validate_editor(user_id, integrator_guid, integrator_name, method_name)
        validation.validate_guid(element_guid, self.element_parameter, method_name)
        validation.validate_name(qualified_name, "qualified_name", method_name)

        path = self._path(
            user_id,
            Operation.REMOVE,
            element_guid,
            (integrator_guid, integrator_name),
            qualified_name=qualified_name,
        )
        await self.client.post(method_name, path)

    async def find(self, user_id: str, search_string: str, start_from: int = 0, page_size: int = 0) -> list[ElementT]:
        """Retrieve elements whose properties match a regular expression."""
        method_name = f"find_{self.kind.plural}"
        validation.validate_user_id(user_id, method_name)
        validation.validate_search_string(search_string, "search_string", method_name)
        page_size = self._validate_paging(start_from, page_size, method_name)

        path = self._path(user_id, Operation.FIND, search_string=search_string)
        return self._to_elements(await self.client.get_elements(method_name, path, start_from, page_size))

    async def get_by_name(self, user_id: str, name: str, start_from: int = 0, page_size: int = 0) -> list[ElementT]:
        """Retrieve elements with an exactly matching qualified or display name; no wildcards."""
        method_name = f"get_{self.kind.plural}_by_name"
        validation.validate_user_id(user_id, method_name)
        validation.validate_name(name, "name", method_name)
        page_size = self._validate_paging(start_from, page_size, method_name)

        path = self._path(user_id, Operation.GET_BY_NAME, name=name)
        return self._to_elements(await self.client.get_elements(method_name, path, start_from, page_size))

    async def get_by_guid(self, user_id: str, guid: str) -> ElementT:
        """Retrieve the element with the supplied unique identifier.

        Raises:
            ElementNotFoundError: If no such element exists
        """
        method_name = f"get_{self.kind.label}_by_guid"
        validation.validate_user_id(user_id, method_name)
        validation.validate_guid(guid, "guid", method_name)

        path = self._path(user_id, Operation.GET_BY_GUID, guid)
        element = await self.client.get_element(method_name, path)
        return self.element_model.model_validate(element)  # type: ignore[return-value]

    async def list_for_parent(
        self,
        user_id: str,
        parent_guid: str,
        start_from: int = 0,
        page_size: int = 0,
    ) -> list[ElementT]:
        """Retrieve the children of one parent element."""
        parent = self.kind.parent
        if parent is None:
            raise InvalidParameterError(
                f"{self.kind.type_name} elements have no parent",
                parameter_name="parent_guid",
                method_name=f"get_{self.kind.plural}",
            )
        method_name = f"get_{self.kind.plural}_for_{parent.label}"
        validation.validate_user_id(user_id, method_name)
        validation.validate_guid(parent_guid, self.parent_parameter, method_name)
        page_size = self._validate_paging(start_from, page_size, method_name)

        path = self._path(user_id, Operation.LIST_FOR_PARENT, parent_guid)
        return self._to_elements(await self.client.get_elements(method_name, path, start_from, page_size))
