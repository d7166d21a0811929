"""
Pydantic schema definitions for the backend's records.

Each record type defines a ``Create`` model (payload without ``id``,
validated the way the console forms validate), an ``Update`` model
(every field optional) and a ``Read`` model (record as returned by the
backend).
"""

from .activity_type import ActivityTypeCreate, ActivityTypeRead, ActivityTypeUpdate
from .branch_hours import EntityBranchHoursCreate, EntityBranchHoursRead, EntityBranchHoursUpdate
from .entity import EntityCreate, EntityRead, EntityUpdate
from .entity_branch import EntityBranchCreate, EntityBranchRead, EntityBranchUpdate
from .entity_status import EntityStatusCreate, EntityStatusRead, EntityStatusUpdate
from .entity_type import EntityTypeCreate, EntityTypeRead, EntityTypeUpdate
from .location import LocationCreate, LocationRead, LocationUpdate
from .user import UserCreate, UserRead, UserUpdate

__all__ = [
    "ActivityTypeCreate",
    "ActivityTypeRead",
    "ActivityTypeUpdate",
    "EntityBranchHoursCreate",
    "EntityBranchHoursRead",
    "EntityBranchHoursUpdate",
    "EntityCreate",
    "EntityRead",
    "EntityUpdate",
    "EntityBranchCreate",
    "EntityBranchRead",
    "EntityBranchUpdate",
    "EntityStatusCreate",
    "EntityStatusRead",
    "EntityStatusUpdate",
    "EntityTypeCreate",
    "EntityTypeRead",
    "EntityTypeUpdate",
    "LocationCreate",
    "LocationRead",
    "LocationUpdate",
    "UserCreate",
    "UserRead",
    "UserUpdate",
]
