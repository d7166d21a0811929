"""
Pydantic models for locations.

Locations form a shallow hierarchy through ``parent_id`` (a province
contains municipalities, for example).  The flags describe the kind of
place; none of them are mutually exclusive on the backend.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .common import not_null, require_text


class LocationBase(BaseModel):
    parent_id: Optional[int] = Field(None, description="Identifier of the enclosing location")
    name: str = Field(..., examples=["Maputo"])
    is_province: bool = False
    is_capital_city: bool = False
    is_municipality: bool = False
    is_active: bool = True


class LocationCreate(LocationBase):
    """Schema for creating a location."""

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return require_text(v, "Name")


class LocationUpdate(BaseModel):
    """Schema for updating a location.

    All fields are optional; only provided fields will be updated.
    """

    parent_id: Optional[int] = None
    name: Optional[str] = None
    is_province: Optional[bool] = None
    is_capital_city: Optional[bool] = None
    is_municipality: Optional[bool] = None
    is_active: Optional[bool] = None

    @field_validator(
        "name", "is_province", "is_capital_city", "is_municipality", "is_active", mode="before"
    )
    @classmethod
    def reject_null(cls, v, info):
        return not_null(v, info.field_name)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return require_text(v, "Name")


class LocationRead(LocationBase):
    """Schema for reading a location from the API."""

    id: int
