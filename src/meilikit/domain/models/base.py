from __future__ import annotations

import re
from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

# RFC 3339 with more than microsecond precision, e.g. 2023-01-05T10:21:03.123456789Z
_FRACTION = re.compile(r"(\.\d{6})\d+")


def _truncate_fraction(value: Any) -> Any:
    if isinstance(value, str):
        return _FRACTION.sub(r"\1", value)
    return value


Timestamp = Annotated[datetime, BeforeValidator(_truncate_fraction)]


class CamelModel(BaseModel):
    """Base model mapping snake_case attributes to the server's camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_payload(self) -> dict[str, Any]:
        """Serialize only the fields the caller actually set, using wire names."""
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")
