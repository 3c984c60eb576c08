"""Account schemas used for login and responses."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr

StaffRole = Literal["ADMIN", "TEACHER", "STAFF"]


class AccountRead(BaseModel):
    id: int
    name: str
    # Auto-provisioned accounts use an internal mail domain, so no EmailStr here
    email: str
    role: str

    model_config = ConfigDict(from_attributes=True)


class StaffCreate(BaseModel):
    email: EmailStr
    password: str
    name: str
    role: StaffRole = "STAFF"
    phone: Optional[str] = None


class StaffRead(AccountRead):
    phone: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None


class StaffUpdate(BaseModel):
    is_active: Optional[bool] = None
    name: Optional[str] = None
    phone: Optional[str] = None
