from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from jose import jwt

from meilikit.domain.exceptions import ClientValidationError

ALGORITHM = "HS256"

# Index uid -> rules (e.g. a forced filter) or None; or a plain list of index uids.
SearchRules = Mapping[str, Mapping[str, Any] | None] | Sequence[str]


def _validate_key_uid(api_key_uid: str) -> None:
    try:
        parsed = UUID(api_key_uid)
    except (TypeError, ValueError) as exc:
        raise ClientValidationError("The api_key_uid must be a valid uuid v4") from exc
    if parsed.version != 4:
        raise ClientValidationError("The api_key_uid must be a valid uuid v4")


def generate_tenant_token(
    api_key_uid: str,
    search_rules: SearchRules,
    api_key: str | None,
    expires_at: datetime | None = None,
) -> str:
    """
    Sign a tenant token restricting searches to ``search_rules``.

    The token is signed locally with ``api_key``; no request is made. The
    key uid must be the uuid v4 of ``api_key`` and ``expires_at``, if set,
    must be in the future.
    """
    if not api_key:
        raise ClientValidationError("An api key is required to sign a tenant token")
    _validate_key_uid(api_key_uid)

    rules = dict(search_rules) if isinstance(search_rules, Mapping) else list(search_rules)
    claims: dict[str, Any] = {"searchRules": rules, "apiKeyUid": api_key_uid}
    if expires_at is not None:
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        if expires_at <= datetime.now(UTC):
            raise ClientValidationError("The expires_at date must be in the future")
        claims["exp"] = int(expires_at.timestamp())
    return jwt.encode(claims, api_key, algorithm=ALGORITHM)
