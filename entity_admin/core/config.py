"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables, the same way for the library and the
``entity-admin`` command.  Defaults are provided for all fields so the
console works against a local backend out of the box.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Console settings loaded from environment variables."""

    # Base URL of the REST backend.  Resource paths such as ``/entities``
    # are appended to it.
    base_url: str = os.getenv("ENTITY_ADMIN_BASE_URL", "http://localhost:3001/api")

    # Optional bearer token sent in the Authorization header.
    api_key: Optional[str] = os.getenv("ENTITY_ADMIN_API_KEY") or None

    # Seconds to wait for the backend before giving up on a request.
    request_timeout: float = float(os.getenv("ENTITY_ADMIN_TIMEOUT", "15"))

    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # JSON file holding the persisted console state (active section).
    state_file: str = os.getenv(
        "ENTITY_ADMIN_STATE_FILE",
        os.path.join(os.path.expanduser("~"), ".entity_admin.json"),
    )


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
