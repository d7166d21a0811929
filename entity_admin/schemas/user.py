"""
Pydantic models for console users.

A user belongs to a user type (``usertypeid``) and optionally to an
entity (``entityid``).  The backend keeps audit columns
(``createdon``/``createdby`` and their ``lastupdated*`` counterparts);
the console fills ``createdon`` when creating a user and leaves the
rest to the server.  Read models tolerate missing audit columns and
passwords because backends commonly omit them from responses.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .common import check_email, not_null, require_text, utc_now_iso

Gender = Literal["M", "F", "O"]


class UserBase(BaseModel):
    email: str = Field(..., examples=["ana@example.com"])
    nickname: Optional[str] = None
    firstname: str
    lastname: str
    phone: Optional[str] = None
    dateofbirth: Optional[str] = Field(None, description="ISO date, e.g. 1990-05-17")
    gender: Optional[Gender] = None
    expirydate: str = Field(..., description="ISO date after which the account expires")
    usertypeid: int
    entityid: Optional[int] = None
    mfaactive: bool = False
    is_active: bool = True
    isdeleted: bool = False


class UserCreate(UserBase):
    """Schema for creating a user.

    ``password`` is sent as entered; hashing is the backend's job.
    """

    password: str
    createdon: str = Field(default_factory=utc_now_iso)
    createdby: Optional[int] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return check_email(require_text(v, "Email"))

    @field_validator("firstname")
    @classmethod
    def validate_firstname(cls, v):
        return require_text(v, "First name")

    @field_validator("lastname")
    @classmethod
    def validate_lastname(cls, v):
        return require_text(v, "Last name")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        if not v or not v.strip():
            raise ValueError("Password is required")
        return v

    @field_validator("expirydate")
    @classmethod
    def validate_expirydate(cls, v):
        return require_text(v, "Expiry date")


class UserUpdate(BaseModel):
    """Schema for updating a user.

    All fields are optional; only provided fields will be updated.
    """

    email: Optional[str] = None
    nickname: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    phone: Optional[str] = None
    dateofbirth: Optional[str] = None
    gender: Optional[Gender] = None
    password: Optional[str] = None
    expirydate: Optional[str] = None
    usertypeid: Optional[int] = None
    entityid: Optional[int] = None
    mfaactive: Optional[bool] = None
    is_active: Optional[bool] = None
    isdeleted: Optional[bool] = None
    lastupdatedon: Optional[str] = None
    lastupdatedby: Optional[int] = None

    @field_validator(
        "email",
        "firstname",
        "lastname",
        "password",
        "expirydate",
        "usertypeid",
        "mfaactive",
        "is_active",
        "isdeleted",
        mode="before",
    )
    @classmethod
    def reject_null(cls, v, info):
        return not_null(v, info.field_name)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return check_email(v)

    @field_validator("firstname", "lastname", "expirydate")
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name)


class UserRead(UserBase):
    """Schema for reading a user from the API."""

    id: int
    password: Optional[str] = None
    createdon: Optional[str] = None
    createdby: Optional[int] = None
    lastupdatedon: Optional[str] = None
    lastupdatedby: Optional[int] = None
