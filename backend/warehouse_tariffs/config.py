"""Runtime configuration read from the environment.

``.env`` files are loaded by ``load_environment`` (the API calls it on
import); settings themselves are read lazily so that importing the library
never requires store credentials.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from warehouse_tariffs.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

_BACKEND_DIR = Path(__file__).resolve().parent.parent
_PROJECT_ROOT = _BACKEND_DIR.parent

_DEFAULT_CORS_ORIGINS = ["http://localhost:3000"]


def load_environment() -> None:
    """Load ``.env`` from the project root and from ``backend/``."""
    load_dotenv(_PROJECT_ROOT / ".env")
    load_dotenv(_BACKEND_DIR / ".env")


def _first(env: Mapping[str, str], *names: str) -> str:
    for name in names:
        value = env.get(name, "").strip()
        if value:
            return value
    return ""


class Settings(BaseModel):
    """Connection settings for the hosted data store and the API."""

    supabase_url: str = ""
    supabase_key: str = ""
    timeout_seconds: float = Field(default=10.0, gt=0)
    cors_origins: list[str] = Field(default_factory=lambda: list(_DEFAULT_CORS_ORIGINS))

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        """Read settings from ``env`` (defaults to ``os.environ``).

        The store URL and key fall back to the ``NEXT_PUBLIC_*`` names the
        dashboard frontend uses, so one ``.env`` serves both.
        """
        env = os.environ if env is None else env
        timeout_raw = _first(env, "SUPABASE_TIMEOUT_SECONDS")
        try:
            timeout = float(timeout_raw) if timeout_raw else 10.0
        except ValueError as exc:
            msg = f"SUPABASE_TIMEOUT_SECONDS must be a number, got '{timeout_raw}'"
            raise ConfigurationError(msg) from exc

        origins_raw = _first(env, "CORS_ORIGINS")
        origins = (
            [origin.strip() for origin in origins_raw.split(",") if origin.strip()]
            if origins_raw
            else list(_DEFAULT_CORS_ORIGINS)
        )

        return cls(
            supabase_url=_first(env, "SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL").rstrip("/"),
            supabase_key=_first(
                env,
                "SUPABASE_SERVICE_ROLE_KEY",
                "SUPABASE_ANON_KEY",
                "NEXT_PUBLIC_SUPABASE_ANON_KEY",
            ),
            timeout_seconds=timeout,
            cors_origins=origins,
        )

    def require_store(self) -> None:
        """Raise ConfigurationError unless the store URL and key are both set."""
        missing = [
            name
            for name, value in (
                ("SUPABASE_URL", self.supabase_url),
                ("SUPABASE_SERVICE_ROLE_KEY", self.supabase_key),
            )
            if not value
        ]
        if missing:
            msg = (
                f"{', '.join(missing)} not set. "
                "Set them to read pricing data from the hosted store."
            )
            raise ConfigurationError(msg)
