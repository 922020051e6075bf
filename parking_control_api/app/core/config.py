"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables; defaults are provided for all fields.  In a
production deployment you should override these via environment
variables.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Callable, List


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _env(name: str, default: str, cast: Callable[[str], Any] = str) -> Any:
    """Default factory reading ``name`` when a ``Settings`` is created."""
    return field(default_factory=lambda: cast(os.getenv(name, default)))


def _flag(value: str) -> bool:
    return value.lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables.

    Values are read each time a ``Settings`` is instantiated, so
    ``Settings()`` reflects the environment at that moment.
    """

    project_name: str = _env("PROJECT_NAME", "Parking Control API")
    api_version: str = _env("API_VERSION", "1.0.0")
    debug: bool = _env("DEBUG", "false", _flag)
    log_level: str = _env("LOG_LEVEL", "INFO")
    log_file: str = _env("LOG_FILE", "")

    # Path to the SQLite database file.  A relative path is resolved
    # against the project root by the ``db`` module.
    database_url: str = _env("DATABASE_URL", "parking_control.db")

    # Address used by ``run.py`` when launching uvicorn.
    host: str = _env("HOST", "0.0.0.0")
    port: int = _env("PORT", "8080", int)

    # Comma‑separated list of allowed origins.  ``*`` accepts any origin.
    cors_origins: List[str] = _env("CORS_ORIGINS", "*", _split_csv)
    cors_max_age: int = _env("CORS_MAX_AGE", "3600", int)


# Module default used by ``create_app`` and ``run.py``.  Build a new
# ``Settings()`` to pick up environment changes made after import.
settings = Settings()
