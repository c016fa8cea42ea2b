from __future__ import annotations

from meilikit.domain.models.base import CamelModel


class MinWordSizeForTypos(CamelModel):
    one_typo: int | None = None
    two_typos: int | None = None


class TypoTolerance(CamelModel):
    enabled: bool | None = None
    disable_on_attributes: list[str] | None = None
    disable_on_words: list[str] | None = None
    min_word_size_for_typos: MinWordSizeForTypos | None = None


class Faceting(CamelModel):
    max_values_per_facet: int | None = None


class PaginationSettings(CamelModel):
    max_total_hits: int | None = None


class Settings(CamelModel):
    """Index settings. Fields left unset are not sent and stay unchanged on update."""

    filterable_attributes: list[str] | None = None
    distinct_attribute: str | None = None
    sortable_attributes: list[str] | None = None
    searchable_attributes: list[str] | None = None
    displayed_attributes: list[str] | None = None
    ranking_rules: list[str] | None = None
    stop_words: list[str] | None = None
    synonyms: dict[str, list[str]] | None = None
    typo_tolerance: TypoTolerance | None = None
    faceting: Faceting | None = None
    pagination: PaginationSettings | None = None
