from __future__ import annotations

from enum import StrEnum
from typing import Any, Union

from pydantic import Field

from meilikit.domain.models.base import CamelModel

# A string expression, or an array whose items are AND-ed and whose nested
# arrays are OR-ed.
Filter = Union[str, list[Union[str, list[str]]]]


class MatchingStrategy(StrEnum):
    ALL = "all"
    LAST = "last"


class SearchParams(CamelModel):
    offset: int | None = None
    limit: int | None = None
    page: int | None = None
    hits_per_page: int | None = None
    filter: Filter | None = None
    sort: list[str] | None = None
    facets: list[str] | None = None
    attributes_to_retrieve: list[str] | None = None
    attributes_to_crop: list[str] | None = None
    crop_length: int | None = None
    crop_marker: str | None = None
    attributes_to_highlight: list[str] | None = None
    highlight_pre_tag: str | None = None
    highlight_post_tag: str | None = None
    show_matches_position: bool | None = None
    matching_strategy: MatchingStrategy | None = None


class MultiSearchQuery(SearchParams):
    index_uid: str
    q: str | None = None


class FacetStat(CamelModel):
    min: float
    max: float


class SearchResponse(CamelModel):
    hits: list[dict[str, Any]] = Field(default_factory=list)
    query: str = ""
    processing_time_ms: int = 0
    facet_distribution: dict[str, dict[str, int]] | None = None
    facet_stats: dict[str, FacetStat] | None = None
    offset: int | None = None
    limit: int | None = None
    estimated_total_hits: int | None = None
    page: int | None = None
    hits_per_page: int | None = None
    total_hits: int | None = None
    total_pages: int | None = None


class MultiSearchResult(SearchResponse):
    index_uid: str


class MultiSearchResponse(CamelModel):
    results: list[MultiSearchResult] = Field(default_factory=list)
