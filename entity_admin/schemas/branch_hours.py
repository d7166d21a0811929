"""
Pydantic models for branch operating hours.

One record describes the opening window of a branch on one weekday.
Weekdays use the Portuguese names the backend stores
(``Segunda-feira`` … ``Domingo``).  A missing ``closetime`` means the
branch does not close at a fixed time that day.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .common import WEEKDAYS, check_time, not_null, require_text


def _check_weekday(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if value not in WEEKDAYS:
        raise ValueError(f"Weekday must be one of: {', '.join(WEEKDAYS)}")
    return value


class EntityBranchHoursBase(BaseModel):
    branchid: int = Field(..., description="Identifier of the branch")
    weekday: str = Field(..., examples=["Segunda-feira"])
    opentime: str = Field(..., examples=["08:00"])
    closetime: Optional[str] = Field(None, examples=["17:30"])


class EntityBranchHoursCreate(EntityBranchHoursBase):
    """Schema for creating branch hours."""

    @field_validator("weekday")
    @classmethod
    def validate_weekday(cls, v):
        return _check_weekday(v)

    @field_validator("opentime")
    @classmethod
    def validate_opentime(cls, v):
        return check_time(require_text(v, "Opening time"), "Opening time")

    @field_validator("closetime")
    @classmethod
    def validate_closetime(cls, v):
        return check_time(v, "Closing time")


class EntityBranchHoursUpdate(BaseModel):
    """Schema for updating branch hours.

    All fields are optional; only provided fields will be updated.
    """

    branchid: Optional[int] = None
    weekday: Optional[str] = None
    opentime: Optional[str] = None
    closetime: Optional[str] = None

    @field_validator("branchid", "weekday", "opentime", mode="before")
    @classmethod
    def reject_null(cls, v, info):
        return not_null(v, info.field_name)

    @field_validator("weekday")
    @classmethod
    def validate_weekday(cls, v):
        return _check_weekday(v)

    @field_validator("opentime")
    @classmethod
    def validate_opentime(cls, v):
        return check_time(require_text(v, "Opening time"), "Opening time")

    @field_validator("closetime")
    @classmethod
    def validate_closetime(cls, v):
        return check_time(v, "Closing time")


class EntityBranchHoursRead(EntityBranchHoursBase):
    """Schema for reading branch hours from the API."""

    id: int
