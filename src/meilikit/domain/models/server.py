from __future__ import annotations

from pydantic import Field

from meilikit.domain.models.base import CamelModel, Timestamp
from meilikit.domain.models.index import IndexStats


class Health(CamelModel):
    status: str


class Stats(CamelModel):
    database_size: int
    last_update: Timestamp | None = None
    indexes: dict[str, IndexStats] = Field(default_factory=dict)


class Version(CamelModel):
    commit_sha: str
    commit_date: str
    pkg_version: str
