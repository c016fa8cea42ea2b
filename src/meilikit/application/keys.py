from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

import inject

from meilikit.domain.models.keys import Key, KeyCreation, KeysQuery, KeysResults, KeyUpdate
from meilikit.domain.repositories import HttpTransport


class KeyClient:
    """Manages API keys. ``key_or_uid`` accepts either the key value or its uid."""

    def __init__(self, http: HttpTransport | None = None) -> None:
        self._http = http or cast(HttpTransport, inject.instance(HttpTransport))

    async def get_keys(self, query: KeysQuery | None = None) -> KeysResults:
        params = query.to_payload() if query is not None else None
        return KeysResults.model_validate(await self._http.get("keys", params))

    async def get_key(self, key_or_uid: str) -> Key:
        return Key.model_validate(await self._http.get(f"keys/{key_or_uid}"))

    async def create_key(self, options: KeyCreation | Mapping[str, Any]) -> Key:
        if not isinstance(options, KeyCreation):
            options = KeyCreation.model_validate(options)
        return Key.model_validate(await self._http.post("keys", options.to_payload()))

    async def update_key(self, key_or_uid: str, options: KeyUpdate | Mapping[str, Any]) -> Key:
        if not isinstance(options, KeyUpdate):
            options = KeyUpdate.model_validate(options)
        raw = await self._http.patch(f"keys/{key_or_uid}", options.to_payload())
        return Key.model_validate(raw)

    async def delete_key(self, key_or_uid: str) -> None:
        await self._http.delete(f"keys/{key_or_uid}")
