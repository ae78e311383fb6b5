"""Data platform access service client."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any

import httpx

from dataplatform_sdk import validation
from dataplatform_sdk.exceptions import (
    DataPlatformConnectionError,
    ElementNotFoundError,
    InvalidParameterError,
    PropertyServerError,
    UserNotAuthorizedError,
)
from dataplatform_sdk.resources.columns import ColumnResource
from dataplatform_sdk.resources.databases import DatabaseResource
from dataplatform_sdk.resources.schemas import SchemaResource
from dataplatform_sdk.resources.tables import TableResource, ViewResource
from dataplatform_sdk.settings import DataPlatformSettings

logger = logging.getLogger(__name__)

SDK_VERSION = "0.1.0"

# Body of every state-transition or relationship call that carries no properties.
NULL_REQUEST_BODY: MappingProxyType[str, str] = MappingProxyType({"class": "NullRequestBody"})


class DataPlatformClient:
    """Client for the data platform access service of a metadata catalog server.

    Manages databases, schemas, tables, views and columns, and the primary and
    foreign key decorations of columns.

    Example:
        >>> async with DataPlatformClient("https://localhost:9443", "cocoMDS1") as client:
        ...     guid = await client.databases.create(
        ...         "erinoverview",
        ...         integrator_guid,
        ...         "ExamplePlatform",
        ...         DatabaseProperties(qualified_name="SalesDB"),
        ...     )

    Args:
        platform_url: Root URL of the platform hosting the catalog server
        server_name: Name of the catalog server
        api_key: Optional bearer token of the calling server
        platform_user_id: Optional user id of the calling server (basic auth)
        platform_password: Password for ``platform_user_id``
        timeout: Request timeout in seconds (default: 30)
        max_page_size: Largest page size the server accepts; 0 disables clamping
        transport: Optional httpx transport
    """

    def __init__(
        self,
        platform_url: str,
        server_name: str,
        *,
        api_key: str | None = None,
        platform_user_id: str | None = None,
        platform_password: str | None = None,
        timeout: float = 30.0,
        max_page_size: int = 1000,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        method_name = "DataPlatformClient"
        validation.validate_name(server_name, "server_name", method_name)
        validation.validate_name(platform_url, "platform_url", method_name)
        if max_page_size < 0:
            raise InvalidParameterError(
                f"The max_page_size parameter passed to {method_name} must be zero or positive",
                parameter_name="max_page_size",
                method_name=method_name,
            )

        self.platform_url = platform_url.rstrip("/")
        self.server_name = server_name
        self.api_key = api_key
        self.timeout = timeout
        self.max_page_size = max_page_size

        headers = {
            "User-Agent": f"dataplatform-sdk/{SDK_VERSION}",
            "Accept": "application/json",
        }
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"

        auth = None
        if platform_user_id:
            auth = httpx.BasicAuth(platform_user_id, platform_password or "")

        self._client = httpx.AsyncClient(
            base_url=self.platform_url,
            headers=headers,
            auth=auth,
            timeout=timeout,
            transport=transport,
        )

        self.databases = DatabaseResource(self)
        self.schemas = SchemaResource(self)
        self.tables = TableResource(self)
        self.views = ViewResource(self)
        self.columns = ColumnResource(self)

        logger.info(f"Data platform client initialized: server={server_name} platform={self.platform_url}")

    @classmethod
    def from_settings(cls, settings: DataPlatformSettings | None = None, **kwargs: Any) -> DataPlatformClient:
        """Create a client from ``DATA_PLATFORM_*`` settings."""
        settings = settings or DataPlatformSettings()
        return cls(
            settings.platform_url,
            settings.server_name,
            api_key=settings.api_key,
            timeout=settings.timeout,
            max_page_size=settings.max_page_size,
            **kwargs,
        )

    async def __aenter__(self) -> DataPlatformClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        method_name: str | None = None,
    ) -> dict[str, Any]:
        """Make one HTTP request to the access service.

        Args:
            method: HTTP method (GET for retrievals, POST for everything else)
            path: Request path built by the address builder
            params: Query parameters
            json: JSON request body
            method_name: Operation name reported in errors

        Returns:
            Response envelope

        Raises:
            InvalidParameterError: If the server rejects a parameter (400)
            UserNotAuthorizedError: If the caller is not authorized (401/403)
            ElementNotFoundError: If the element does not exist (404)
            PropertyServerError: For other server failures
            DataPlatformConnectionError: If the server cannot be reached
        """
        method_name = method_name or path
        logger.debug(f"{method_name}: {method} {path}")
        try:
            response = await self._client.request(
                method=method,
                url=path,
                params=params,
                json=json,
            )
        except httpx.HTTPError as e:
            logger.warning(f"{method_name}: failed to reach {self.platform_url}: {e}")
            raise DataPlatformConnectionError(
                f"Failed to connect to metadata server {self.server_name}: {e}", method_name=method_name
            ) from e

        if response.status_code >= 400:
            self._handle_error_response(response, method_name)

        try:
            data = response.json()
        except ValueError as e:
            raise PropertyServerError(
                f"{method_name} received a response that is not JSON",
                status_code=response.status_code,
                method_name=method_name,
            ) from e

        if not isinstance(data, dict):
            raise PropertyServerError(
                f"{method_name} received an unexpected response envelope",
                status_code=response.status_code,
                method_name=method_name,
            )

        related_code = data.get("relatedHTTPCode")
        if isinstance(related_code, int) and related_code >= 400:
            self._raise_for_envelope(related_code, data, method_name)

        return data

    def _handle_error_response(self, response: httpx.Response, method_name: str) -> None:
        """Handle error responses from the server."""
        try:
            error_data = response.json()
        except ValueError:
            error_data = None
        if not isinstance(error_data, dict):
            error_data = {}
        self._raise_for_envelope(response.status_code, error_data, method_name)

    def _raise_for_envelope(self, status_code: int, error_data: dict[str, Any], method_name: str) -> None:
        message = (
            error_data.get("exceptionErrorMessage")
            or error_data.get("detail")
            or f"{method_name} failed with status {status_code}"
        )
        exception_class = error_data.get("exceptionClassName")
        if not isinstance(exception_class, str):
            exception_class = ""
        response_data = error_data or None
        logger.warning(f"{method_name}: server returned {status_code}: {message}")

        if exception_class.endswith("InvalidParameterException") or (not exception_class and status_code == 400):
            properties = error_data.get("exceptionProperties")
            parameter_name = properties.get("parameterName") if isinstance(properties, dict) else None
            raise InvalidParameterError(
                message,
                parameter_name=parameter_name,
                method_name=method_name,
                status_code=status_code,
                response_data=response_data,
            )
        if exception_class.endswith("UserNotAuthorizedException") or status_code in (401, 403):
            raise UserNotAuthorizedError(message, status_code, response_data, method_name)
        if status_code == 404:
            raise ElementNotFoundError(message, status_code, response_data, method_name)
        raise PropertyServerError(message, status_code, response_data, method_name)

    async def post_for_guid(self, method_name: str, path: str, body: dict[str, Any]) -> str:
        """Issue a create call and return the GUID of the new element."""
        data = await self.request("POST", path, json=body, method_name=method_name)
        guid = data.get("guid")
        if not guid:
            raise PropertyServerError(
                f"{method_name} did not return the unique identifier of the new element",
                response_data=data,
                method_name=method_name,
            )
        return guid

    async def post(self, method_name: str, path: str, body: dict[str, Any] | None = None) -> None:
        """Issue an update, state-transition or relationship call."""
        await self.request(
            "POST",
            path,
            json=body if body is not None else dict(NULL_REQUEST_BODY),
            method_name=method_name,
        )

    async def get_element(self, method_name: str, path: str) -> dict[str, Any]:
        """Retrieve a single element, raising :class:`ElementNotFoundError` if absent."""
        data = await self.request("GET", path, method_name=method_name)
        element = data.get("element")
        if not element:
            raise ElementNotFoundError(
                f"{method_name} found no element at {path}",
                status_code=404,
                response_data=data,
                method_name=method_name,
            )
        return element

    async def get_elements(self, method_name: str, path: str, start_from: int, page_size: int) -> list[dict[str, Any]]:
        """Retrieve one page of elements; an empty page is a normal result."""
        data = await self.request(
            "GET",
            path,
            params={"startFrom": start_from, "pageSize": page_size},
            method_name=method_name,
        )
        elements = data.get("elements")
        if elements is None:
            elements = data.get("elementList")
        return list(elements or [])
