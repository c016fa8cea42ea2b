from __future__ import annotations

from pydantic import Field

from meilikit.domain.models.base import CamelModel, Timestamp


class Key(CamelModel):
    uid: str
    key: str
    name: str | None = None
    description: str | None = None
    actions: list[str] = Field(default_factory=list)
    indexes: list[str] = Field(default_factory=list)
    expires_at: Timestamp | None = None
    created_at: Timestamp
    updated_at: Timestamp


class KeyCreation(CamelModel):
    uid: str | None = None
    name: str | None = None
    description: str | None = None
    actions: list[str]
    indexes: list[str]
    # None means the key never expires and must still be sent explicitly.
    expires_at: Timestamp | None = Field(default=None)

    def to_payload(self) -> dict:
        payload = super().to_payload()
        payload.setdefault("expiresAt", None)
        return payload


class KeyUpdate(CamelModel):
    name: str | None = None
    description: str | None = None


class KeysQuery(CamelModel):
    offset: int | None = None
    limit: int | None = None


class KeysResults(CamelModel):
    results: list[Key] = Field(default_factory=list)
    offset: int | None = None
    limit: int | None = None
    total: int = 0
