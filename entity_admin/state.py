"""
Console navigation state.

The console has one screen per resource and mode: a ``create`` section
showing an empty form and a ``manage`` section listing the records.
:class:`AppState` remembers which section is active and persists it
through a :class:`KeyValueStore` so the console reopens where it was
left.  It also keeps a ``refresh_key`` that is bumped whenever a form
succeeds; views keyed on it know to refetch.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Tuple

from entity_admin.services.resources import RESOURCES_BY_KEY, Resource

logger = logging.getLogger(__name__)

ACTIVE_SECTION_KEY = "activeSection"


class KeyValueStore(Protocol):
    """Minimal string key-value persistence."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """Non-persistent store, useful for tests and one-off sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """Store backed by a small JSON object on disk.

    A missing or unreadable file behaves as an empty store; it is
    rewritten on the next :meth:`set`.
    """

    def __init__(self, path: str | os.PathLike) -> None:
        self.path = Path(path).expanduser()

    def _read(self) -> Dict[str, str]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable state file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, self.path)


@dataclass(frozen=True)
class Section:
    """One console screen."""

    id: str
    label: str
    resource: Resource
    mode: str  # "create" or "manage"

    @property
    def is_manage(self) -> bool:
        return self.mode == "manage"

    @property
    def description(self) -> str:
        return "View and manage records" if self.is_manage else "Create new records"


# Menu order; the section id prefix differs from the resource key for
# a few resources.
_MENU: Tuple[Tuple[str, str, str, str], ...] = (
    ("locations", "locations", "Create Location", "Manage Locations"),
    ("entity-status", "entity-status", "Create Entity Status", "Manage Entity Statuses"),
    ("activity-types", "activity-types", "Create Activity Type", "Manage Activity Types"),
    ("entity-types", "entity-types", "Create Entity Type", "Manage Entity Types"),
    ("users", "users", "Create User", "Manage Users"),
    ("entities", "entities", "Create Entity", "Manage Entities"),
    ("branches", "entity-branches", "Create Branch", "Manage Branches"),
    ("branch-hours", "branch-hours", "Create Opening Hours", "Manage Opening Hours"),
)


def _build_sections() -> List[Section]:
    sections: List[Section] = []
    for prefix, resource_key, create_label, manage_label in _MENU:
        resource = RESOURCES_BY_KEY[resource_key]
        sections.append(Section(f"{prefix}-create", create_label, resource, "create"))
        sections.append(Section(f"{prefix}-manage", manage_label, resource, "manage"))
    return sections


SECTIONS: List[Section] = _build_sections()
SECTIONS_BY_ID: Dict[str, Section] = {section.id: section for section in SECTIONS}
DEFAULT_SECTION = "locations-create"


class AppState:
    """Active section and refresh counter of the console."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store
        self.refresh_key = 0
        saved = store.get(ACTIVE_SECTION_KEY)
        if saved in SECTIONS_BY_ID:
            self._active = saved
        else:
            if saved is not None:
                logger.info("Ignoring unknown saved section %r", saved)
            self._active = DEFAULT_SECTION

    @property
    def active_section(self) -> str:
        return self._active

    @property
    def active(self) -> Section:
        return SECTIONS_BY_ID[self._active]

    def select(self, section_id: str) -> Section:
        """Activate ``section_id`` and persist the choice.

        Raises:
            KeyError: If the section does not exist.
        """
        if section_id not in SECTIONS_BY_ID:
            raise KeyError(f"Unknown section {section_id!r}")
        self._active = section_id
        self.store.set(ACTIVE_SECTION_KEY, section_id)
        logger.debug("Active section is now %s", section_id)
        return SECTIONS_BY_ID[section_id]

    def form_succeeded(self) -> int:
        """Record a successful form submission; returns the new refresh key."""
        self.refresh_key += 1
        return self.refresh_key

    @property
    def view_key(self) -> str:
        """Identity of the current view; changes when a refetch is due."""
        return f"{self._active}-{self.refresh_key}"
