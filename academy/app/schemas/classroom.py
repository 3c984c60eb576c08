"""Subject and class schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

ClassStatusValue = Literal["ACTIVE", "INACTIVE"]


class SubjectCreate(BaseModel):
    name: str
    description: Optional[str] = None


class SubjectRead(SubjectCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)


class TeacherSummary(BaseModel):
    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class ClassCreate(BaseModel):
    name: str
    subject_id: int
    teacher_id: int
    schedule: Optional[str] = None
    max_capacity: int = 20


class ClassUpdate(BaseModel):
    name: Optional[str] = None
    subject_id: Optional[int] = None
    teacher_id: Optional[int] = None
    schedule: Optional[str] = None
    max_capacity: Optional[int] = None
    status: Optional[ClassStatusValue] = None


class ClassRead(BaseModel):
    id: int
    name: str
    schedule: Optional[str] = None
    max_capacity: int
    status: str
    subject: SubjectRead
    teacher: TeacherSummary
    enrollment_count: int = 0
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RosterEntry(BaseModel):
    student_id: int
    name: str
    student_number: str
    school: Optional[str] = None
    grade: Optional[str] = None
    enrollment_status: str


class ClassDetail(ClassRead):
    roster: list[RosterEntry] = []


class EnrollRequest(BaseModel):
    student_id: int


class EnrollmentRead(BaseModel):
    id: int
    student_id: int
    classroom_id: int
    status: str
    enrolled_at: datetime

    model_config = ConfigDict(from_attributes=True)
