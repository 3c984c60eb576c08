from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

TargetRole = Literal["ALL", "PARENT", "STUDENT", "STAFF"]


class AnnouncementCreate(BaseModel):
    title: str
    content: str
    target_role: TargetRole
    expiry_date: Optional[date] = None


class AnnouncementUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    target_role: Optional[TargetRole] = None
    expiry_date: Optional[date] = None
    is_active: Optional[bool] = None


class AnnouncementRead(BaseModel):
    id: int
    title: str
    content: str
    target_role: str
    is_active: bool
    publish_date: datetime
    expiry_date: Optional[date] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
