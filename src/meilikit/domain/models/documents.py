from __future__ import annotations

from enum import StrEnum
from typing import Any, Generic, TypeVar

from pydantic import Field

from meilikit.domain.models.base import CamelModel

T = TypeVar("T")

Document = dict[str, Any]


class ContentType(StrEnum):
    JSON = "application/json"
    CSV = "text/csv"
    NDJSON = "application/x-ndjson"


class DocumentsQuery(CamelModel):
    offset: int | None = None
    limit: int | None = None
    fields: list[str] | None = None


class ResourceResults(CamelModel, Generic[T]):
    results: list[T] = Field(default_factory=list)
    offset: int | None = None
    limit: int | None = None
    total: int = 0
