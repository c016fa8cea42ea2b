from pydantic import ConfigDict
from pydantic_settings import BaseSettings

from meilikit.domain.models.wait_options import DEFAULT_INTERVAL_MS, DEFAULT_TIMEOUT_MS


class ClientSettings(BaseSettings):
    """Connection and polling configuration for the search client."""

    MEILI_HOST: str = "http://127.0.0.1:7700"
    MEILI_API_KEY: str | None = None
    MEILI_TIMEOUT_SECONDS: float | None = None
    MEILI_CLIENT_AGENTS: list[str] = []
    WAIT_TIMEOUT_MS: int = DEFAULT_TIMEOUT_MS
    WAIT_INTERVAL_MS: int = DEFAULT_INTERVAL_MS
    DOCUMENTS_BATCH_SIZE: int = 1000

    model_config = ConfigDict(env_file=".env", extra="ignore")


def get_client_settings() -> ClientSettings:
    """Return a fresh client settings instance."""
    return ClientSettings()
