"""
Pydantic models for entity types.

An entity type classifies an organisation (company, association,
public body...).  Entities reference it through ``entitytypeid``.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .common import not_null, require_text


class EntityTypeBase(BaseModel):
    name: str = Field(..., examples=["Sociedade Anónima"])
    description: Optional[str] = None
    is_active: bool = True


class EntityTypeCreate(EntityTypeBase):
    """Schema for creating an entity type."""

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return require_text(v, "Name")


class EntityTypeUpdate(BaseModel):
    """Schema for updating an entity type.

    All fields are optional; only provided fields will be updated.
    """

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


class EntityTypeRead(EntityTypeBase):
    """Schema for reading an entity type from the API."""

    id: int
