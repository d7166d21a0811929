"""
Pydantic models for entity branches.

A branch is a physical site of an entity, placed in a location and
carrying its own status.  GPS coordinates are kept as strings, exactly
as the backend stores them.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .common import check_email, check_time, not_null, utc_now_iso


class EntityBranchBase(BaseModel):
    entityid: int
    is_main: bool = False
    address: Optional[str] = None
    postcode: Optional[str] = None
    locationid: int
    phone: Optional[str] = None
    contactname: Optional[str] = None
    contactphone: Optional[str] = None
    contactemail: Optional[str] = None
    gpslat: Optional[str] = Field(None, examples=["-25.9692"])
    gpslong: Optional[str] = Field(None, examples=["32.5732"])
    openonholidays: bool = False
    holidaysopentime: Optional[str] = None
    holidaysclosetime: Optional[str] = None
    entitystatusid: int
    is_deleted: bool = False


class EntityBranchCreate(EntityBranchBase):
    """Schema for creating a branch."""

    createdon: str = Field(default_factory=utc_now_iso)
    createdby: Optional[int] = None

    @field_validator("contactemail")
    @classmethod
    def validate_contactemail(cls, v):
        # The form leaves the field empty rather than omitting it.
        if v is None or not v.strip():
            return None
        return check_email(v)

    @field_validator("holidaysopentime", "holidaysclosetime")
    @classmethod
    def validate_holiday_times(cls, v, info):
        return check_time(v, info.field_name)


class EntityBranchUpdate(BaseModel):
    """Schema for updating a branch.

    All fields are optional; only provided fields will be updated.
    """

    entityid: Optional[int] = None
    is_main: Optional[bool] = None
    address: Optional[str] = None
    postcode: Optional[str] = None
    locationid: Optional[int] = None
    phone: Optional[str] = None
    contactname: Optional[str] = None
    contactphone: Optional[str] = None
    contactemail: Optional[str] = None
    gpslat: Optional[str] = None
    gpslong: Optional[str] = None
    openonholidays: Optional[bool] = None
    holidaysopentime: Optional[str] = None
    holidaysclosetime: Optional[str] = None
    entitystatusid: Optional[int] = None
    is_deleted: Optional[bool] = None
    lastupdatedon: Optional[str] = None
    lastupdatedby: Optional[int] = None

    @field_validator(
        "entityid",
        "is_main",
        "locationid",
        "openonholidays",
        "entitystatusid",
        "is_deleted",
        mode="before",
    )
    @classmethod
    def reject_null(cls, v, info):
        return not_null(v, info.field_name)

    @field_validator("contactemail")
    @classmethod
    def validate_contactemail(cls, v):
        if v is None or not v.strip():
            return None
        return check_email(v)

    @field_validator("holidaysopentime", "holidaysclosetime")
    @classmethod
    def validate_holiday_times(cls, v, info):
        return check_time(v, info.field_name)


class EntityBranchRead(EntityBranchBase):
    """Schema for reading a branch from the API."""

    id: int
    createdon: Optional[str] = None
    createdby: Optional[int] = None
    lastupdatedon: Optional[str] = None
    lastupdatedby: Optional[int] = None
