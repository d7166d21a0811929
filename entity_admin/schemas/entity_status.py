"""
Pydantic models for entity statuses (e.g. active, suspended).
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .common import not_null, require_text


class EntityStatusBase(BaseModel):
    name: str = Field(..., examples=["Activa"])
    description: Optional[str] = None
    is_active: bool = True


class EntityStatusCreate(EntityStatusBase):
    """Schema for creating an entity status."""

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return require_text(v, "Name")


class EntityStatusUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("name", "is_active", mode="before")
    @classmethod
    def reject_null(cls, v, info):
        return not_null(v, info.field_name)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return require_text(v, "Name")


class EntityStatusRead(EntityStatusBase):
    id: int
