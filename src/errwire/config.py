"""Runtime settings, read from the environment."""

from __future__ import annotations

import os
import socket
from dataclasses import dataclass
from typing import Mapping, Optional


def _env_truthy(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_flag(value: str | None) -> Optional[bool]:
    """Tri-state: unset or blank -> None, else truthy/falsy."""
    if value is None or not value.strip():
        return None
    return _env_truthy(value)


@dataclass(frozen=True)
class Settings:
    production: bool = False
    include_timestamp: bool = False
    hostname: str = "localhost"
    log_level: str = "INFO"
    # Explicit override; None means "diagnostics unless production".
    diagnostics_override: Optional[bool] = None

    @property
    def diagnostics(self) -> bool:
        """Whether stack traces and error kind names are disclosed."""
        if self.diagnostics_override is not None:
            return self.diagnostics_override
        return not self.production

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from ERRWIRE_* variables (APP_ENV as a fallback)."""
        env = os.environ if environ is None else environ
        stage = env.get("ERRWIRE_ENV") or env.get("APP_ENV") or "development"
        return cls(
            production=stage.strip().lower() == "production",
            include_timestamp=_env_truthy(env.get("ERRWIRE_TIMESTAMP")),
            hostname=env.get("ERRWIRE_HOSTNAME") or socket.gethostname(),
            log_level=env.get("ERRWIRE_LOG_LEVEL", "INFO"),
            diagnostics_override=_env_flag(env.get("ERRWIRE_DIAGNOSTICS")),
        )
