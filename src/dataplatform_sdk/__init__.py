"""Data platform Python SDK.

Async client for the data platform access service of a metadata catalog
server: databases, schemas, tables, views, columns and their keys.
"""

from __future__ import annotations

from dataplatform_sdk.client import DataPlatformClient
from dataplatform_sdk.exceptions import (
    DataPlatformAPIError,
    DataPlatformConnectionError,
    DataPlatformError,
    ElementNotFoundError,
    InvalidParameterError,
    PropertyServerError,
    UserNotAuthorizedError,
)
from dataplatform_sdk.models import (
    DatabaseColumnElement,
    DatabaseColumnProperties,
    DatabaseElement,
    DatabaseForeignKeyProperties,
    DatabasePrimaryKeyProperties,
    DatabaseProperties,
    DatabaseQueryProperties,
    DatabaseSchemaElement,
    DatabaseSchemaProperties,
    DatabaseTableElement,
    DatabaseTableProperties,
    DatabaseViewElement,
    DatabaseViewProperties,
    KeyPattern,
)
from dataplatform_sdk.settings import DataPlatformSettings

__version__ = "0.1.0"

__all__ = [
    "DataPlatformClient",
    "DataPlatformSettings",
    "DataPlatformError",
    "DataPlatformAPIError",
    "DataPlatformConnectionError",
    "ElementNotFoundError",
    "InvalidParameterError",
    "PropertyServerError",
    "UserNotAuthorizedError",
    "DatabaseColumnElement",
    "DatabaseColumnProperties",
    "DatabaseElement",
    "DatabaseForeignKeyProperties",
    "DatabasePrimaryKeyProperties",
    "DatabaseProperties",
    "DatabaseQueryProperties",
    "DatabaseSchemaElement",
    "DatabaseSchemaProperties",
    "DatabaseTableElement",
    "DatabaseTableProperties",
    "DatabaseViewElement",
    "DatabaseViewProperties",
    "KeyPattern",
]
