"""
Settings and logging for the student directory frontend.

This is the only module that reads environment variables. A `.env` file found
from the working directory upwards is loaded first (local dev), real env vars win.

Public API:
    get_settings()          → Settings
    setup_logging(settings) → None   (idempotent across Streamlit reruns)
"""

import logging
import logging.handlers
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

DEFAULT_API_URL  = "http://localhost:8080"
DEFAULT_LOG_FILE = Path("logs") / "frontend.log"
LOG_FORMAT       = "%(asctime)s  %(levelname)s  %(message)s"

_logging_ready = False


@dataclass(frozen=True)
class Settings:
    api_base_url: str
    request_timeout: float | None   # None → transport default (no timeout)
    log_level: str
    log_file: Path | None


def _getenv(name: str, default: str | None = None) -> str | None:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def _parse_timeout(raw: str | None) -> float | None:
    if raw is None:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(f"STUDENT_DIRECTORY_REQUEST_TIMEOUT must be a number, got {raw!r}")
    return timeout if timeout > 0 else None


def _log_file(raw: str | None) -> Path | None:
    """Unset → default file; set but empty → no file logging."""
    if raw is None:
        return DEFAULT_LOG_FILE
    raw = raw.strip()
    if not raw:
        return None
    return Path(raw)


def get_settings() -> Settings:
    load_dotenv(find_dotenv(usecwd=True), override=False)

    return Settings(
        api_base_url=(_getenv("STUDENT_DIRECTORY_API_URL") or DEFAULT_API_URL).rstrip("/"),
        request_timeout=_parse_timeout(_getenv("STUDENT_DIRECTORY_REQUEST_TIMEOUT")),
        log_level=(_getenv("STUDENT_DIRECTORY_LOG_LEVEL") or "INFO").upper(),
        log_file=_log_file(os.getenv("STUDENT_DIRECTORY_LOG_FILE")),
    )


def setup_logging(settings: Settings) -> None:
    """Attach stdout + rotating file handlers to the root logger once per process."""
    global _logging_ready
    if _logging_ready:
        return

    fmt = logging.Formatter(LOG_FORMAT)

    root = logging.getLogger()
    root.setLevel(settings.log_level)

    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(fmt)
    root.addHandler(stream)

    if settings.log_file is not None:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        # Rotate at 5 MB, keep 3 backups
        rotating = logging.handlers.RotatingFileHandler(
            settings.log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
        )
        rotating.setFormatter(fmt)
        root.addHandler(rotating)

    _logging_ready = True
