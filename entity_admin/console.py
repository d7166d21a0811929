"""
List and form controllers of the administration console.

Every console screen is either a list of records of one resource or a
form creating/editing one record.  The controllers here hold the
screen's state and talk to the resource services; rendering is left
to the front end (the ``entity-admin`` CLI, or any other view layer).

Failures never escape these controllers.  A failed request becomes a
single generic notification ("Failed to load locations") and the
screen keeps its previous state; validation problems are reported per
field without contacting the backend.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional

from pydantic import BaseModel, ValidationError

from entity_admin.client import ApiError, ApiService
from entity_admin.services import ServiceRegistry, get_resource
from entity_admin.services.resources import Resource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: str = "default"  # "default" or "destructive"


class Notifier:
    """Collects user-facing notifications and forwards them to a sink."""

    def __init__(self, sink: Optional[Callable[[Notification], None]] = None) -> None:
        self.sink = sink
        self.history: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        level = logging.WARNING if notification.variant == "destructive" else logging.INFO
        logger.log(level, "%s: %s", notification.title, notification.description)
        self.history.append(notification)
        if self.sink is not None:
            self.sink(notification)

    def success(self, description: str) -> None:
        self.notify(Notification("Success", description))

    def error(self, description: str) -> None:
        self.notify(Notification("Error", description, "destructive"))

    @property
    def last(self) -> Optional[Notification]:
        return self.history[-1] if self.history else None


def _display(record: BaseModel, resource: Resource) -> str:
    value = getattr(record, resource.display_field, None)
    record_id = getattr(record, "id", None)
    if value in (None, ""):
        return f"#{record_id}"
    return str(value)


def load_related(registry: ServiceRegistry, resource: Resource, notifier: Notifier) -> Dict[str, Dict[int, str]]:
    """Fetch the choices for each foreign key of ``resource``.

    Returns a mapping ``field -> {id: display text}``.  A resource that
    fails to load yields an empty mapping for its fields and one
    notification.
    """
    options: Dict[str, Dict[int, str]] = {}
    cache: Dict[str, Dict[int, str]] = {}
    failed = False
    for field_name, target_key in resource.relations.items():
        if target_key not in cache:
            target = get_resource(target_key)
            try:
                records = registry[target_key].get_all()
            except ApiError as e:
                logger.error("Failed to load %s for %s: %s", target.label, resource.key, e)
                failed = True
                cache[target_key] = {}
            else:
                cache[target_key] = {record.id: _display(record, target) for record in records}
        options[field_name] = cache[target_key]
    if failed:
        notifier.error("Failed to load related data")
    return options


def _field_errors(exc: ValidationError) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for error in exc.errors():
        field_name = ".".join(str(part) for part in error.get("loc", ())) or "__root__"
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.setdefault(field_name, message)
    return errors


class RecordForm:
    """Create or edit one record.

    A form built without ``record`` creates; with ``record`` it edits
    that record and submits partial updates.
    """

    def __init__(
        self,
        registry: ServiceRegistry,
        resource_key: str,
        *,
        notifier: Notifier,
        record: Optional[BaseModel] = None,
        on_success: Optional[Callable[[], None]] = None,
    ) -> None:
        self.registry = registry
        self.resource = get_resource(resource_key)
        self.service: ApiService = registry[resource_key]
        self.notifier = notifier
        self.record = record
        self.on_success = on_success
        self.errors: Dict[str, str] = {}
        self.is_loading = False
        self.values: Dict[str, Any] = {}
        self.reset()

    @property
    def is_editing(self) -> bool:
        return self.record is not None and getattr(self.record, "id", None) is not None

    def reset(self) -> None:
        """Restore the initial values (the record being edited, or blanks)."""
        self.errors = {}
        if self.record is not None:
            self.values = self.record.model_dump(exclude={"id"})
        else:
            self.values = {
                name: field.get_default(call_default_factory=True)
                for name, field in self.resource.create_model.model_fields.items()
                if not field.is_required()
            }

    def load_related(self) -> Dict[str, Dict[int, str]]:
        return load_related(self.registry, self.resource, self.notifier)

    def validate(self, data: Mapping[str, Any]) -> Optional[BaseModel]:
        """Validate ``data`` and return the payload model, or ``None`` with :attr:`errors` set."""
        schema = self.resource.update_model if self.is_editing else self.resource.create_model
        payload = {key: value for key, value in data.items() if key != "id"}
        try:
            validated = schema.model_validate(payload)
        except ValidationError as exc:
            self.errors = _field_errors(exc)
            logger.debug("Validation failed for %s: %s", self.resource.key, self.errors)
            return None
        self.errors = {}
        return validated

    def submit(self, data: Mapping[str, Any]) -> Optional[BaseModel]:
        """Validate and save ``data``.

        Returns the saved record, or ``None`` if validation or the
        request failed.
        """
        validated = self.validate(data)
        if validated is None:
            return None
        singular = self.resource.singular
        self.is_loading = True
        try:
            if self.is_editing:
                saved = self.service.update(self.record.id, validated)
            else:
                saved = self.service.create(validated)
        except ApiError as e:
            logger.error("Failed to save %s: %s", singular, e)
            self.notifier.error(f"Failed to save {singular}")
            return None
        finally:
            self.is_loading = False

        if self.is_editing:
            self.record = saved
            self.values = saved.model_dump(exclude={"id"})
            self.notifier.success(f"{singular.capitalize()} updated successfully")
        else:
            self.reset()
            self.notifier.success(f"{singular.capitalize()} created successfully")
        if self.on_success is not None:
            self.on_success()
        return saved


class RecordList:
    """Records of one resource with edit and delete actions."""

    def __init__(
        self,
        registry: ServiceRegistry,
        resource_key: str,
        *,
        notifier: Notifier,
        on_success: Optional[Callable[[], None]] = None,
    ) -> None:
        self.registry = registry
        self.resource = get_resource(resource_key)
        self.service: ApiService = registry[resource_key]
        self.notifier = notifier
        self.on_success = on_success
        self.records: List[BaseModel] = []
        self.loading = False

    def load(self) -> List[BaseModel]:
        """Fetch the records; on failure the list is emptied and the user notified."""
        self.loading = True
        try:
            self.records = self.service.get_all()
        except ApiError as e:
            logger.error("Failed to load %s: %s", self.resource.label, e)
            self.notifier.error(f"Failed to load {self.resource.label}")
            self.records = []
        finally:
            self.loading = False
        return self.records

    def find(self, record_id: int) -> Optional[BaseModel]:
        for record in self.records:
            if record.id == record_id:
                return record
        return None

    def remove(self, record_id: int, confirm: Optional[Callable[[BaseModel | int], bool]] = None) -> bool:
        """Delete a record after optional confirmation, then refetch.

        ``confirm`` receives the record (or its id when it is not in the
        loaded list) and returns ``False`` to abort.
        """
        singular = self.resource.singular
        if confirm is not None and not confirm(self.find(record_id) or record_id):
            return False
        try:
            self.service.delete(record_id)
        except ApiError as e:
            logger.error("Failed to delete %s %s: %s", singular, record_id, e)
            self.notifier.error(f"Failed to delete {singular}")
            return False
        self.notifier.success(f"{singular.capitalize()} deleted successfully")
        self.load()
        if self.on_success is not None:
            self.on_success()
        return True

    def _form_saved(self) -> None:
        self.load()
        if self.on_success is not None:
            self.on_success()

    def new_form(self) -> RecordForm:
        return RecordForm(self.registry, self.resource.key, notifier=self.notifier, on_success=self._form_saved)

    def edit(self, record_id: int) -> Optional[RecordForm]:
        """Return a form editing ``record_id``, fetching it if it is not loaded."""
        record = self.find(record_id)
        if record is None:
            try:
                record = self.service.get_by_id(record_id)
            except ApiError as e:
                logger.error("Failed to load %s %s: %s", self.resource.singular, record_id, e)
                self.notifier.error(f"Failed to load {self.resource.singular}")
                return None
        return RecordForm(
            self.registry,
            self.resource.key,
            notifier=self.notifier,
            record=record,
            on_success=self._form_saved,
        )

    def load_related(self) -> Dict[str, Dict[int, str]]:
        return load_related(self.registry, self.resource, self.notifier)
