"""
Pydantic models for economic activity types.

Activity types follow a classification tree: ``code`` identifies the
activity and the optional class, group, division and section codes
place it in the hierarchy.  Only the code and the description are
mandatory.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .common import not_null, require_text


class ActivityTypeBase(BaseModel):
    code: str = Field(..., examples=["4711"])
    class_code: Optional[str] = None
    group_code: Optional[str] = None
    division_code: Optional[str] = None
    section_code: Optional[str] = None
    description: str = Field(..., examples=["Retail sale in non-specialised stores"])
    is_active: bool = True


class ActivityTypeCreate(ActivityTypeBase):
    """Schema for creating an activity type."""

    @field_validator("code")
    @classmethod
    def validate_code(cls, v):
        return require_text(v, "Code")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return require_text(v, "Description")


class ActivityTypeUpdate(BaseModel):
    """Schema for updating an activity type.

    All fields are optional; only provided fields will be updated.
    """

    code: Optional[str] = None
    class_code: Optional[str] = None
    group_code: Optional[str] = None
    division_code: Optional[str] = None
    section_code: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("code", "description", "is_active", mode="before")
    @classmethod
    def reject_null(cls, v, info):
        return not_null(v, info.field_name)

    @field_validator("code")
    @classmethod
    def validate_code(cls, v):
        return require_text(v, "Code")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return require_text(v, "Description")


class ActivityTypeRead(ActivityTypeBase):
    """Schema for reading an activity type from the API."""

    id: int
