"""Settings from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

# Every retrieval path (direct requests and post-mutation refreshes) uses this.
LATEST_SOLVES_LIMIT = 12


def _default_db_path() -> str:
    return os.path.join(os.path.expanduser("~"), ".cuber", "cuber.db")


@dataclass
class Settings:
    """Application settings loaded from environment."""

    db_path: str = ""
    latest_limit: int = LATEST_SOLVES_LIMIT

    # Observability
    log_format: str = "pretty"  # "json" or "pretty"
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            db_path=os.environ.get("CUBER_DB_PATH") or _default_db_path(),
            latest_limit=int(os.environ.get("CUBER_LATEST_LIMIT", str(LATEST_SOLVES_LIMIT))),
            log_format=os.environ.get("LOG_FORMAT", "pretty"),
            log_level=os.environ.get("LOG_LEVEL", "WARNING").upper(),
        )


settings = Settings.from_env()
