from __future__ import annotations

"""Logging configuration: rotating JSON-lines file plus a terse console."""

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from datetime import datetime, timezone
from typing import Any, Dict

LOG_DIR_NAME = "logs"
LOG_FILE_BASENAME = "app.log"
EXTRA_PREFIX = "_json_"


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra`` keys prefixed ``_json_`` are lifted."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for k, v in record.__dict__.items():
            if k.startswith(EXTRA_PREFIX):
                payload[k[len(EXTRA_PREFIX):]] = v
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(base_dir: Path, level: int = logging.INFO) -> Path:  # pragma: no cover
    log_dir = base_dir / LOG_DIR_NAME
    log_dir.mkdir(parents=True, exist_ok=True)
    logfile = log_dir / LOG_FILE_BASENAME
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    handler = RotatingFileHandler(logfile, maxBytes=512_000, backupCount=5, encoding="utf-8")
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)
    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root.addHandler(console)
    logging.getLogger(__name__).info("logging initialised", extra={"_json_phase": "startup"})
    return logfile


__all__ = ["configure_logging", "JsonFormatter"]
