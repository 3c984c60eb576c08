from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict


class GradeEntry(BaseModel):
    student_id: int
    score: float
    max_score: float = 100
    remarks: Optional[str] = None


class GradeBatch(BaseModel):
    class_id: int
    test_name: str
    test_date: date
    grades: list[GradeEntry]


class GradeUpdate(BaseModel):
    test_name: Optional[str] = None
    test_date: Optional[date] = None
    score: Optional[float] = None
    max_score: Optional[float] = None
    remarks: Optional[str] = None


class GradeRead(BaseModel):
    id: int
    student_id: int
    classroom_id: int
    test_name: str
    test_date: date
    score: float
    max_score: float
    remarks: Optional[str] = None
    student_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ExamSummary(BaseModel):
    test_name: str
    test_date: date
    count: int
    average_score: float
    average_percentage: float
    highest_score: float
    lowest_score: float
