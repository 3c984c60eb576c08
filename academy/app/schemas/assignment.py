"""Assignment and submission schemas."""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

SubmissionStatusValue = Literal["NOT_SUBMITTED", "SUBMITTED", "GRADED"]


class AssignmentCreate(BaseModel):
    class_id: int
    title: str
    description: Optional[str] = None
    assignment_date: date
    due_date: date


class AssignmentUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    assignment_date: Optional[date] = None
    due_date: Optional[date] = None


class SubmissionRead(BaseModel):
    id: int
    assignment_id: int
    student_id: int
    status: str
    submitted_at: Optional[datetime] = None
    score: Optional[float] = None
    feedback: Optional[str] = None
    student_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class SubmissionUpdate(BaseModel):
    student_id: int
    status: SubmissionStatusValue
    score: Optional[float] = None
    feedback: Optional[str] = None


class AssignmentRead(BaseModel):
    id: int
    classroom_id: int
    title: str
    description: Optional[str] = None
    assignment_date: date
    due_date: date
    submissions: list[SubmissionRead] = []
    submission_count: int = 0
    total_count: int = 0

    model_config = ConfigDict(from_attributes=True)


class StudentSubmissionGroup(BaseModel):
    student_id: int
    student_name: str
    submitted_count: int
    total_count: int
    submissions: list[SubmissionRead]
