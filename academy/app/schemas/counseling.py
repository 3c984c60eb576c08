from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

CounselingStatusValue = Literal["PENDING", "CONFIRMED", "COMPLETED", "CANCELLED"]
CounselingType = Literal["PHONE", "VISIT"]


class CounselingCreate(BaseModel):
    student_id: int
    title: str
    parent_id: Optional[int] = None
    description: Optional[str] = None
    preferred_date: Optional[date] = None
    status: CounselingStatusValue = "PENDING"
    admin_notes: Optional[str] = None
    session_date: Optional[date] = None
    session_notes: Optional[str] = None


class CounselingUpdate(BaseModel):
    status: Optional[CounselingStatusValue] = None
    admin_notes: Optional[str] = None
    session_date: Optional[date] = None
    session_notes: Optional[str] = None


class CounselingRead(BaseModel):
    id: int
    parent_id: Optional[int] = None
    student_id: int
    student_name: Optional[str] = None
    title: str
    description: Optional[str] = None
    counseling_type: str
    visit_message: Optional[str] = None
    preferred_date: Optional[date] = None
    status: str
    admin_notes: Optional[str] = None
    session_date: Optional[date] = None
    session_notes: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MobileCounselingCreate(BaseModel):
    student_id: int
    title: str
    description: Optional[str] = None
    preferred_date: Optional[date] = None
    counseling_type: CounselingType = "PHONE"
    visit_message: Optional[str] = None
