from __future__ import annotations

"""Application configuration read from LUMINA_* environment variables."""

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Mapping, Optional

BACKENDS = ("local", "http")


@dataclass(slots=True)
class AppConfig:
    backend: str = "local"
    api_url: str = "http://localhost:3000"
    user_id: str = "local"
    data_dir: Path = Path("data")
    log_level: int = logging.INFO
    http_timeout: float = 10.0

    @property
    def db_path(self) -> Path:
        return self.data_dir / "lumina_timer.sqlite"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        env = os.environ if environ is None else environ
        backend = env.get("LUMINA_BACKEND", "local").strip().lower()
        if backend not in BACKENDS:
            raise ValueError(f"LUMINA_BACKEND must be one of {BACKENDS}, got {backend!r}")
        level_name = env.get("LUMINA_LOG_LEVEL", "INFO").strip().upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown LUMINA_LOG_LEVEL: {level_name!r}")
        raw_timeout = env.get("LUMINA_HTTP_TIMEOUT", "10")
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(f"LUMINA_HTTP_TIMEOUT must be a number, got {raw_timeout!r}") from None
        return cls(
            backend=backend,
            api_url=env.get("LUMINA_API_URL", "http://localhost:3000").rstrip("/"),
            user_id=env.get("LUMINA_USER_ID", "local").strip() or "local",
            data_dir=Path(env.get("LUMINA_DATA_DIR", "data")),
            log_level=level,
            http_timeout=timeout,
        )


__all__ = ["AppConfig", "BACKENDS"]
