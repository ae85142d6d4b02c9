"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration at all.
"""

import os
from dataclasses import dataclass, field
from typing import List


def _split_names(raw: str) -> List[str]:
    return [name.strip() for name in raw.split(",") if name.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Agree/Disagree API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Address uvicorn binds to when started through ``run.py``.
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Comma‑separated list of client names whose stores are opened at
    # startup, e.g. DEFAULT_CLIENTS="demo,staging".  Leave empty to start
    # with no stores and open them through ``/api/v1/clients``.
    default_clients: List[str] = field(
        default_factory=lambda: _split_names(os.getenv("DEFAULT_CLIENTS", ""))
    )


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
