from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

AttendanceStatusValue = Literal["PRESENT", "ABSENT", "LATE", "EARLY_LEAVE", "EXCUSED"]


class AttendanceEntry(BaseModel):
    student_id: int
    status: AttendanceStatusValue
    check_in_time: Optional[str] = None
    remarks: Optional[str] = None


class AttendanceBatch(BaseModel):
    class_id: int
    date: date
    records: list[AttendanceEntry]


class AttendanceRead(BaseModel):
    id: int
    student_id: int
    classroom_id: int
    date: date
    status: str
    check_in_time: Optional[str] = None
    remarks: Optional[str] = None
    student_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AttendanceSummary(BaseModel):
    total: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    early_leave: int = 0
    excused: int = 0
    attendance_rate: float = 0.0


class StudentAttendanceSummary(AttendanceSummary):
    student_id: int
    student_name: str


class ClassAttendanceSummary(BaseModel):
    class_id: int
    month: Optional[str] = None
    overall: AttendanceSummary
    students: list[StudentAttendanceSummary]
