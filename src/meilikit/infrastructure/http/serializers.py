from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import UTC, date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel


def _isoformat(value: date) -> str:
    # The server only accepts RFC 3339, so naive datetimes are taken as UTC.
    if isinstance(value, datetime) and value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.isoformat()


def _as_query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (datetime, date)):
        return _isoformat(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(_as_query_value(item) for item in value)
    return str(value)


def encode_query(params: Mapping[str, Any] | None) -> dict[str, str]:
    """Flatten parameters into query-string values.

    ``None`` values are dropped and sequences are joined with commas.
    """
    if not params:
        return {}
    return {key: _as_query_value(value) for key, value in params.items() if value is not None}


def encode_json(body: Any) -> bytes:
    if isinstance(body, BaseModel):
        body = body.model_dump(by_alias=True, exclude_unset=True, mode="json")
    return json.dumps(body, default=_json_default).encode("utf-8")


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return _isoformat(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_unset=True, mode="json")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def decode_body(content: bytes) -> Any:
    if not content:
        return None
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise ValueError("Invalid response JSON") from exc
