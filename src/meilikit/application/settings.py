from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, TypeAdapter

from meilikit.domain.models.settings import Faceting, PaginationSettings, TypoTolerance


@dataclass(frozen=True)
class SettingRoute:
    name: str
    segment: str
    update_method: str
    payload_type: Any
    adapter: TypeAdapter = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "adapter", TypeAdapter(self.payload_type))

    def path(self, index_uid: str) -> str:
        return f"indexes/{index_uid}/settings/{self.segment}"

    def parse(self, raw: Any) -> Any:
        return self.adapter.validate_python(raw)

    def dump(self, value: Any) -> Any:
        if isinstance(value, BaseModel):
            return value.model_dump(by_alias=True, exclude_unset=True, mode="json")
        return self.adapter.dump_python(
            self.adapter.validate_python(value),
            by_alias=True,
            exclude_unset=True,
            mode="json",
        )


_ROUTES: tuple[SettingRoute, ...] = (
    SettingRoute("pagination", "pagination", "PATCH", PaginationSettings),
    SettingRoute("synonyms", "synonyms", "PUT", dict[str, list[str]] | None),
    SettingRoute("stop_words", "stop-words", "PUT", list[str] | None),
    SettingRoute("ranking_rules", "ranking-rules", "PUT", list[str] | None),
    SettingRoute("distinct_attribute", "distinct-attribute", "PUT", str | None),
    SettingRoute("filterable_attributes", "filterable-attributes", "PUT", list[str] | None),
    SettingRoute("sortable_attributes", "sortable-attributes", "PUT", list[str] | None),
    SettingRoute("searchable_attributes", "searchable-attributes", "PUT", list[str] | None),
    SettingRoute("displayed_attributes", "displayed-attributes", "PUT", list[str] | None),
    SettingRoute("typo_tolerance", "typo-tolerance", "PATCH", TypoTolerance),
    SettingRoute("faceting", "faceting", "PATCH", Faceting),
)


class SettingsRegistry:
    """Registry mapping setting names to their sub-resource path, verb and payload type.

    List-valued settings are updated with PUT and always replace the stored
    value. Resetting is a DELETE that restores the server default.
    """

    def __init__(self) -> None:
        self._registry: dict[str, SettingRoute] = {route.name: route for route in _ROUTES}

    def route_for(self, name: str) -> SettingRoute:
        try:
            return self._registry[name]
        except KeyError as exc:
            raise ValueError(f"No settings route registered for {name!r}") from exc

    def names(self) -> list[str]:
        return list(self._registry)
