"""
Declarative table of the backend's REST resources.

Each :class:`Resource` binds a resource key to its URL path, the
schemas describing its records, a human readable label used in
notifications and menus, the field used to display a record in
lookups, and the foreign keys pointing at other resources.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple, Type

from pydantic import BaseModel

from entity_admin import schemas


@dataclass(frozen=True)
class Resource:
    """Binding between a REST path and its record schemas.

    Attributes:
        key: Resource identifier, also used in section ids and the CLI.
        path: Collection path relative to the API base URL.
        read_model: Schema of records returned by the backend.
        create_model: Schema validating new records.
        update_model: Schema validating partial updates.
        label: Plural label, e.g. ``"locations"``.
        singular: Singular label, e.g. ``"location"``.
        display_field: Record attribute shown when the record is
            offered as a choice for a foreign key.
        relations: Foreign key field -> key of the referenced resource.
    """

    key: str
    path: str
    read_model: Type[BaseModel]
    create_model: Type[BaseModel]
    update_model: Type[BaseModel]
    label: str
    singular: str
    display_field: str
    relations: Dict[str, str] = field(default_factory=dict)


RESOURCES: Tuple[Resource, ...] = (
    Resource(
        key="locations",
        path="/locations",
        read_model=schemas.LocationRead,
        create_model=schemas.LocationCreate,
        update_model=schemas.LocationUpdate,
        label="locations",
        singular="location",
        display_field="name",
        relations={"parent_id": "locations"},
    ),
    Resource(
        key="entity-status",
        path="/entity-status",
        read_model=schemas.EntityStatusRead,
        create_model=schemas.EntityStatusCreate,
        update_model=schemas.EntityStatusUpdate,
        label="entity statuses",
        singular="entity status",
        display_field="name",
    ),
    Resource(
        key="activity-types",
        path="/activity-types",
        read_model=schemas.ActivityTypeRead,
        create_model=schemas.ActivityTypeCreate,
        update_model=schemas.ActivityTypeUpdate,
        label="activity types",
        singular="activity type",
        display_field="description",
    ),
    Resource(
        key="entity-types",
        path="/entity-types",
        read_model=schemas.EntityTypeRead,
        create_model=schemas.EntityTypeCreate,
        update_model=schemas.EntityTypeUpdate,
        label="entity types",
        singular="entity type",
        display_field="name",
    ),
    Resource(
        key="users",
        path="/users",
        read_model=schemas.UserRead,
        create_model=schemas.UserCreate,
        update_model=schemas.UserUpdate,
        label="users",
        singular="user",
        display_field="email",
        relations={"entityid": "entities"},
    ),
    Resource(
        key="entities",
        path="/entities",
        read_model=schemas.EntityRead,
        create_model=schemas.EntityCreate,
        update_model=schemas.EntityUpdate,
        label="entities",
        singular="entity",
        display_field="officialname",
        relations={
            "entitytypeid": "entity-types",
            "activitytypeid": "activity-types",
            "entitystatusid": "entity-status",
        },
    ),
    Resource(
        key="entity-branches",
        path="/entity-branches",
        read_model=schemas.EntityBranchRead,
        create_model=schemas.EntityBranchCreate,
        update_model=schemas.EntityBranchUpdate,
        label="branches",
        singular="branch",
        display_field="address",
        relations={
            "entityid": "entities",
            "locationid": "locations",
            "entitystatusid": "entity-status",
        },
    ),
    Resource(
        key="branch-hours",
        path="/branch-hours",
        read_model=schemas.EntityBranchHoursRead,
        create_model=schemas.EntityBranchHoursCreate,
        update_model=schemas.EntityBranchHoursUpdate,
        label="branch hours",
        singular="branch hours",
        display_field="weekday",
        relations={"branchid": "entity-branches"},
    ),
)

RESOURCES_BY_KEY: Dict[str, Resource] = {resource.key: resource for resource in RESOURCES}


def get_resource(key: str) -> Resource:
    """Return the resource registered under ``key``.

    Raises:
        KeyError: If no resource uses that key.
    """
    try:
        return RESOURCES_BY_KEY[key]
    except KeyError:
        known = ", ".join(RESOURCES_BY_KEY)
        raise KeyError(f"Unknown resource {key!r}; expected one of: {known}") from None
