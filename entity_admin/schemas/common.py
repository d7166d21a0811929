"""
Validation helpers shared by the record schemas.

The backend stores dates and times as strings; the console sends them
as entered and only checks the shapes the forms enforce.
"""

import re
from datetime import datetime, timezone
from typing import Optional

EMAIL_PATTERN = re.compile(r"^[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}$", re.IGNORECASE)
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$")

WEEKDAYS = (
    "Segunda-feira",
    "Terça-feira",
    "Quarta-feira",
    "Quinta-feira",
    "Sexta-feira",
    "Sábado",
    "Domingo",
)

GENDERS = ("M", "F", "O")


def utc_now_iso() -> str:
    """Current UTC timestamp in ISO 8601 with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def not_null(value, label: str):
    """Reject an explicit ``null`` for a column the record cannot leave empty.

    Used as a ``mode="before"`` validator on update schemas: omitted
    fields are never validated, so they still mean "unchanged".
    """
    if value is None:
        raise ValueError(f"{label} cannot be empty")
    return value


def require_text(value: Optional[str], label: str) -> Optional[str]:
    """Reject blank strings; ``None`` passes through for partial updates."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError(f"{label} is required")
    return value


def check_email(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email address")
    return value


def check_time(value: Optional[str], label: str) -> Optional[str]:
    """Accept ``HH:MM`` or ``HH:MM:SS``.  Empty optional times become ``None``."""
    if value is None or not value.strip():
        return None
    value = value.strip()
    if not TIME_PATTERN.match(value):
        raise ValueError(f"{label} must be formatted as HH:MM")
    return value
