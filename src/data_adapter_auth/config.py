"""
data_adapter_auth.config — Environment-driven configuration.

Environment variables:
    DATA_ADAPTER_AUTHORIZER         default authorizer name
    DATA_ADAPTER_BASE_URL           prefix for relative request URLs
    DATA_ADAPTER_TIMEOUT_SECONDS    request timeout (default 30)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

AUTHORIZER_ENV = "DATA_ADAPTER_AUTHORIZER"
BASE_URL_ENV = "DATA_ADAPTER_BASE_URL"
TIMEOUT_ENV = "DATA_ADAPTER_TIMEOUT_SECONDS"

DEFAULT_TIMEOUT_SECONDS: float = 30.0


@dataclass(frozen=True)
class AdapterAuthConfig:
    """Resolved adapter configuration.

    authorizer may be None here; the interceptor asserts its presence only
    when an authorization hook actually runs.
    """

    authorizer: str | None = None
    base_url: str | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {self.timeout_seconds!r}")

    @classmethod
    def from_env(cls) -> AdapterAuthConfig:
        """Build a config from the process environment. Empty strings count as unset."""
        raw_timeout = os.environ.get(TIMEOUT_ENV)
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_SECONDS
        except ValueError:
            raise ValueError(f"{TIMEOUT_ENV} must be a number, got {raw_timeout!r}") from None
        return cls(
            authorizer=os.environ.get(AUTHORIZER_ENV) or None,
            base_url=os.environ.get(BASE_URL_ENV) or None,
            timeout_seconds=timeout,
        )
