"""Pydantic schema for client configuration.

Durations are in seconds. A zero timeout means "no limit".
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class ClientOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    timeout: float = Field(60.0, ge=0, description="Request timeout")
    tls_handshake_timeout: float = Field(5.0, ge=0)
    dial_timeout: float = Field(5.0, ge=0)
    max_tries: int = Field(1, ge=0, description="Retries after the first failed attempt")
    verbose: bool = False
    retry_delay: Optional[float] = Field(None, ge=0, description="Sleep between retries, defaults to timeout")

    @property
    def effective_retry_delay(self) -> float:
        if self.retry_delay is None:
            return self.timeout
        return self.retry_delay

DEFAULT_OPTIONS = ClientOptions()
