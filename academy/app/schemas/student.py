"""Student schemas."""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

StudentStatusValue = Literal["ACTIVE", "COMPLETED", "WITHDRAWN"]


class StudentBase(BaseModel):
    name: str
    date_of_birth: Optional[date] = None
    phone: Optional[str] = None
    parent_phone: Optional[str] = None
    school: Optional[str] = None
    grade: Optional[str] = None
    status: StudentStatusValue = "ACTIVE"


class StudentCreate(StudentBase):
    student_number: Optional[str] = None


class StudentUpdate(BaseModel):
    name: Optional[str] = None
    date_of_birth: Optional[date] = None
    phone: Optional[str] = None
    parent_phone: Optional[str] = None
    school: Optional[str] = None
    grade: Optional[str] = None
    status: Optional[StudentStatusValue] = None
    withdrawal_reason: Optional[str] = None
    withdrawal_date: Optional[date] = None


class ParentSummary(BaseModel):
    id: int
    name: str
    phone: Optional[str] = None


class ClassSummary(BaseModel):
    id: int
    name: str
    subject: Optional[str] = None


class StudentRead(StudentBase):
    id: int
    student_number: str
    user_id: Optional[int] = None
    withdrawal_reason: Optional[str] = None
    withdrawal_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StudentDetail(StudentRead):
    parents: list[ParentSummary] = []
    classes: list[ClassSummary] = []
