from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import ConfigDict, Field

from meilikit.domain.models.base import CamelModel, Timestamp

T = TypeVar("T")


class IndexObject(CamelModel):
    uid: str = Field(description="Unique index identifier.")
    primary_key: str | None = Field(default=None, description="Document primary key.")
    created_at: Timestamp = Field(description="When the index was created.")
    updated_at: Timestamp = Field(description="When the index was last updated.")


class IndexOptions(CamelModel):
    primary_key: str | None = None


class IndexesQuery(CamelModel):
    offset: int | None = None
    limit: int | None = None


class IndexesResults(CamelModel, Generic[T]):
    # Also carries live ``Index`` handles, which are not pydantic models.
    model_config = ConfigDict(arbitrary_types_allowed=True)

    results: list[T] = Field(default_factory=list)
    offset: int | None = None
    limit: int | None = None
    total: int = 0


class IndexStats(CamelModel):
    number_of_documents: int
    is_indexing: bool
    field_distribution: dict[str, int] = Field(default_factory=dict)


class IndexSwap(CamelModel):
    indexes: tuple[str, str] = Field(description="Pair of index uids to swap.")
