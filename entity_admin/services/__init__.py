"""
Service layer: one typed CRUD service per backend resource.

Services are built from the declarative :data:`RESOURCES` table rather
than written out per entity.  A :class:`ServiceRegistry` binds every
resource to a shared :class:`~entity_admin.client.ApiClient` and
exposes the services under their conventional names::

    registry = get_registry()
    registry.location_service.get_all()
    registry["branch-hours"].delete(4)
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, Optional

from entity_admin.client import ApiClient, ApiService
from entity_admin.schemas import (
    ActivityTypeRead,
    EntityBranchHoursRead,
    EntityBranchRead,
    EntityRead,
    EntityStatusRead,
    EntityTypeRead,
    LocationRead,
    UserRead,
)

from .resources import RESOURCES, RESOURCES_BY_KEY, Resource, get_resource

logger = logging.getLogger(__name__)

__all__ = [
    "RESOURCES",
    "RESOURCES_BY_KEY",
    "Resource",
    "ServiceRegistry",
    "get_registry",
    "get_resource",
    "reset_registry",
]


class ServiceRegistry:
    """All resource services bound to one client."""

    entity_service: ApiService[EntityRead]
    user_service: ApiService[UserRead]
    entity_type_service: ApiService[EntityTypeRead]
    entity_branch_service: ApiService[EntityBranchRead]
    location_service: ApiService[LocationRead]
    activity_type_service: ApiService[ActivityTypeRead]
    entity_status_service: ApiService[EntityStatusRead]
    branch_hours_service: ApiService[EntityBranchHoursRead]

    # Resource key -> attribute name of its service.
    _ATTRIBUTES = {
        "entities": "entity_service",
        "users": "user_service",
        "entity-types": "entity_type_service",
        "entity-branches": "entity_branch_service",
        "locations": "location_service",
        "activity-types": "activity_type_service",
        "entity-status": "entity_status_service",
        "branch-hours": "branch_hours_service",
    }

    def __init__(self, client: ApiClient) -> None:
        self.client = client
        self._services: Dict[str, ApiService] = {}
        for resource in RESOURCES:
            service = ApiService(
                client,
                resource.path,
                resource.read_model,
                create_model=resource.create_model,
                update_model=resource.update_model,
            )
            self._services[resource.key] = service
            setattr(self, self._ATTRIBUTES[resource.key], service)

    def __getitem__(self, key: str) -> ApiService:
        get_resource(key)
        return self._services[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._services)

    def resource(self, key: str) -> Resource:
        return get_resource(key)


_registry: Optional[ServiceRegistry] = None


def get_registry() -> ServiceRegistry:
    """Return the process-wide registry, building it from settings on first use."""
    global _registry
    if _registry is None:
        client = ApiClient.from_settings()
        logger.debug("Building service registry for %s", client.base_url)
        _registry = ServiceRegistry(client)
    return _registry


def reset_registry() -> None:
    """Close and forget the process-wide registry."""
    global _registry
    if _registry is not None:
        _registry.client.close()
        _registry = None
