"""Data platform SDK exceptions."""

from __future__ import annotations

from typing import Any


class DataPlatformError(Exception):
    """Base exception for all data platform SDK errors."""


class InvalidParameterError(DataPlatformError):
    """A caller-supplied parameter is missing or malformed.

    Raised by the validation gate before any request is issued, or when the
    catalog server rejects a parameter (for example a qualified name that does
    not match the element being removed).
    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        method_name: str | None = None,
        status_code: int | None = None,
        response_data: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.parameter_name = parameter_name
        self.method_name = method_name
        self.status_code = status_code
        self.response_data = response_data


class DataPlatformAPIError(DataPlatformError):
    """API request failed."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_data: dict[str, Any] | None = None,
        method_name: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data
        self.method_name = method_name


class UserNotAuthorizedError(DataPlatformAPIError):
    """The server rejected the caller's authorization (401/403)."""


class ElementNotFoundError(DataPlatformAPIError):
    """No element matches the requested unique identifier (404)."""


class PropertyServerError(DataPlatformAPIError):
    """The metadata server reported a processing failure."""


class DataPlatformConnectionError(PropertyServerError):
    """Failed to reach the metadata server."""
