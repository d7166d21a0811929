"""
Entity administration console.

Typed REST client and console controllers for managing entities,
their branches and opening hours, users, locations and the lookup
tables they reference.
"""

from entity_admin.client import ApiClient, ApiError, ApiService

__version__ = "1.0.0"

__all__ = ["ApiClient", "ApiError", "ApiService", "__version__"]
