"""
Pydantic models for entities (the organisations managed by the console).

An entity is identified for tax and social security purposes by its
``nuit`` and ``ssnumber`` and registered under ``registrationnumber``.
It references an entity type, an activity type and a status.  The
``logofile`` and ``picture`` columns are binary on the backend; the
console passes through whatever JSON representation the backend uses
(commonly a base64 string or ``null``).
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .common import check_email, not_null, require_text, utc_now_iso


class EntityBase(BaseModel):
    officialname: str = Field(..., examples=["Cervejas de Moçambique, S.A."])
    preferredname: Optional[str] = None
    nuit: str = Field(..., description="Tax identification number")
    ssnumber: str = Field(..., description="Social security number")
    registrationnumber: str
    registrationdate: str = Field(..., description="ISO date of registration")
    activitystartdate: Optional[str] = None
    entitytypeid: int
    activitytypeid: int
    website: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    logofile: Optional[Any] = None
    picture: Optional[Any] = None
    entitystatusid: int
    isdeleted: bool = False


class EntityCreate(EntityBase):
    """Schema for creating an entity."""

    createdon: str = Field(default_factory=utc_now_iso)
    createdby: Optional[int] = None

    @field_validator("officialname", "nuit", "ssnumber", "registrationnumber", "registrationdate")
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        if v is None or not v.strip():
            return None
        return check_email(v)


class EntityUpdate(BaseModel):
    """Schema for updating an entity.

    All fields are optional; only provided fields will be updated.
    """

    officialname: Optional[str] = None
    preferredname: Optional[str] = None
    nuit: Optional[str] = None
    ssnumber: Optional[str] = None
    registrationnumber: Optional[str] = None
    registrationdate: Optional[str] = None
    activitystartdate: Optional[str] = None
    entitytypeid: Optional[int] = None
    activitytypeid: Optional[int] = None
    website: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    logofile: Optional[Any] = None
    picture: Optional[Any] = None
    entitystatusid: Optional[int] = None
    isdeleted: Optional[bool] = None
    lastupdatedon: Optional[str] = None
    lastupdatedby: Optional[int] = None

    @field_validator(
        "officialname",
        "nuit",
        "ssnumber",
        "registrationnumber",
        "registrationdate",
        "entitytypeid",
        "activitytypeid",
        "entitystatusid",
        "isdeleted",
        mode="before",
    )
    @classmethod
    def reject_null(cls, v, info):
        return not_null(v, info.field_name)

    @field_validator("officialname", "nuit", "ssnumber", "registrationnumber", "registrationdate")
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        if v is None or not v.strip():
            return None
        return check_email(v)


class EntityRead(EntityBase):
    """Schema for reading an entity from the API."""

    id: int
    createdon: Optional[str] = None
    createdby: Optional[int] = None
    lastupdatedon: Optional[str] = None
    lastupdatedby: Optional[int] = None
