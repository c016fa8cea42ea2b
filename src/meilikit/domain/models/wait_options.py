from pydantic import BaseModel, Field

DEFAULT_TIMEOUT_MS = 5000
DEFAULT_INTERVAL_MS = 50


class WaitOptions(BaseModel):
    """Polling budget for waiting on tasks.

    ``interval_ms`` larger than ``timeout_ms`` is accepted; the wait then
    sleeps once and polls a final time before timing out.
    """

    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, ge=0)
    interval_ms: int = Field(default=DEFAULT_INTERVAL_MS, gt=0)
