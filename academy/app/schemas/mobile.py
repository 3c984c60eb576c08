"""Response shapes for the parent/student mobile app."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

from academy.app.schemas.attendance import AttendanceSummary
from academy.app.schemas.dashboard import AnnouncementBrief


class MobileClass(BaseModel):
    id: int
    name: str
    subject: str
    teacher: Optional[str] = None
    schedule: Optional[str] = None


class ChildRead(BaseModel):
    id: int
    name: str
    student_number: str
    school: Optional[str] = None
    grade: Optional[str] = None
    status: str
    relation: Optional[str] = None
    classes: list[MobileClass]


class StudentProfile(BaseModel):
    id: int
    name: str
    student_number: str
    school: Optional[str] = None
    grade: Optional[str] = None
    classes: list[MobileClass]


class MobileAttendanceRecord(BaseModel):
    id: int
    date: date
    status: str
    check_in_time: Optional[str] = None
    remarks: Optional[str] = None
    classroom: str


class MobileAttendance(BaseModel):
    summary: AttendanceSummary
    records: list[MobileAttendanceRecord]


class MobileGrade(BaseModel):
    id: int
    test_name: str
    score: float
    max_score: float
    test_date: date
    remarks: Optional[str] = None
    classroom: str
    subject: str


class MobileSubmission(BaseModel):
    status: str
    submitted_at: Optional[datetime] = None
    score: Optional[float] = None
    feedback: Optional[str] = None


class MobileAssignment(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    due_date: date
    assignment_date: date
    classroom: str
    subject: str
    submission: MobileSubmission


class MobileDashboard(BaseModel):
    recent_grades: list[MobileGrade]
    attendance: AttendanceSummary
    pending_assignments: int
    announcements: list[AnnouncementBrief]
