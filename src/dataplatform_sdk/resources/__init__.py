"""Data platform SDK resource modules."""

from __future__ import annotations

from dataplatform_sdk.resources.base import ElementResource
from dataplatform_sdk.resources.columns import ColumnResource
from dataplatform_sdk.resources.databases import DatabaseResource
from dataplatform_sdk.resources.schemas import SchemaResource
from dataplatform_sdk.resources.tables import TableResource, ViewResource

__all__ = [
    "ColumnResource",
    "DatabaseResource",
    "ElementResource",
    "SchemaResource",
    "TableResource",
    "ViewResource",
]
