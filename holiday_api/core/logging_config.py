# holiday_api/core/logging_config.py
"""
Logging configuration for the holiday API.

Production writes JSON lines to rotating files, development writes colored
lines to the console. Callers attach context with ``extra=``: request fields
come from the request middleware, holiday fields from catalog resolution.
"""

import copy
import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

from holiday_api.core.config import IS_PRODUCTION

LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))
APP_LOG_FILE = LOG_DIR / "app.log"
ERROR_LOG_FILE = LOG_DIR / "error.log"

# Record attributes promoted to top-level JSON keys when present
CONTEXT_FIELDS = (
    "request_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "holiday",
    "kind",
    "year",
)

_THIRD_PARTY_LEVELS = {
    "uvicorn": logging.INFO,
    "uvicorn.access": logging.INFO,
    "uvicorn.error": logging.INFO,
    "watchfiles": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
}

_MB = 1_000_000


def holiday_context(name: str, kind, year: int) -> dict:
    """``extra=`` mapping for log lines about one holiday in one year."""
    return {"holiday": name, "kind": getattr(kind, "name", kind), "year": year}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data.update(getattr(record, "extra_fields", {}))
        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Other handlers share the record and must see the plain level name
        if record.levelname in self.COLORS:
            record = copy.copy(record)
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.RESET}"
        return super().format(record)


def _rotating_file(
    path: Path, level: int, formatter: logging.Formatter, max_mb: int, backups: int
) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(path, maxBytes=max_mb * _MB, backupCount=backups, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _console(level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def production_handlers() -> list[logging.Handler]:
    """JSON to app.log (INFO), error.log (ERROR) and stdout (WARNING)."""
    formatter = JSONFormatter()
    return [
        _rotating_file(APP_LOG_FILE, logging.INFO, formatter, max_mb=10, backups=5),
        _rotating_file(ERROR_LOG_FILE, logging.ERROR, formatter, max_mb=10, backups=10),
        _console(logging.WARNING, formatter),
    ]


def development_handlers() -> list[logging.Handler]:
    """Colored console plus a small plain-text app.log, both at DEBUG."""
    console_formatter = ColoredFormatter(
        fmt="%(levelname)-8s %(asctime)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_formatter = logging.Formatter("%(levelname)s %(asctime)s [%(name)s:%(lineno)d] %(message)s")
    return [
        _console(logging.DEBUG, console_formatter),
        _rotating_file(APP_LOG_FILE, logging.DEBUG, file_formatter, max_mb=5, backups=2),
    ]


def setup_logging() -> None:
    """Replace the root logger's handlers with the ones for this environment."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO if IS_PRODUCTION else logging.DEBUG)
    root_logger.handlers.clear()
    for handler in production_handlers() if IS_PRODUCTION else development_handlers():
        root_logger.addHandler(handler)

    for name, level in _THIRD_PARTY_LEVELS.items():
        logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).info(
        f"Logging configured (production={IS_PRODUCTION})",
        extra={"extra_fields": {"log_dir": str(LOG_DIR.absolute()), "production": IS_PRODUCTION}},
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
