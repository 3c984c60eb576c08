"""Attendance roll-call endpoints."""

from collections import defaultdict
from datetime import date as date_type
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from academy.app.core.time import month_bounds, today
from academy.app.db.session import get_db
from academy.app.dependencies.auth import SessionContext, get_staff_context
from academy.app.models.attendance import AttendanceRecord
from academy.app.models.student import Student
from academy.app.schemas.attendance import (
    AttendanceBatch,
    AttendanceRead,
    ClassAttendanceSummary,
    StudentAttendanceSummary,
)
from academy.app.api.classes import get_classroom_or_404
from academy.app.services.reporting import summarize_attendance

router = APIRouter(prefix="/attendance", tags=["attendance"])


def _attendance_read(record: AttendanceRecord) -> AttendanceRead:
    data = AttendanceRead.model_validate(record)
    data.student_name = record.student.name if record.student else None
    return data


@router.get("/", response_model=list[AttendanceRead])
def list_attendance(
    class_id: int,
    date: Optional[date_type] = None,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    target_date = date or today()
    records = (
        db.query(AttendanceRecord)
        .filter(AttendanceRecord.classroom_id == class_id, AttendanceRecord.date == target_date)
        .all()
    )
    return [_attendance_read(r) for r in records]


@router.post("/", response_model=list[AttendanceRead])
def save_attendance(
    batch: AttendanceBatch,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    classroom = get_classroom_or_404(db, batch.class_id)
    # A student listed twice in one batch keeps the last entry
    pending: dict[int, AttendanceRecord] = {}
    for entry in batch.records:
        if not db.query(Student).filter(Student.id == entry.student_id).first():
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student {entry.student_id} not found")
        record = pending.get(entry.student_id) or (
            db.query(AttendanceRecord)
            .filter(
                AttendanceRecord.student_id == entry.student_id,
                AttendanceRecord.classroom_id == classroom.id,
                AttendanceRecord.date == batch.date,
            )
            .first()
        )
        if record is None:
            record = AttendanceRecord(student_id=entry.student_id, classroom_id=classroom.id, date=batch.date)
            db.add(record)
        record.status = entry.status
        record.check_in_time = entry.check_in_time or None
        record.remarks = entry.remarks or None
        pending[entry.student_id] = record
    saved = list(pending.values())
    db.commit()
    for record in saved:
        db.refresh(record)
    return [_attendance_read(r) for r in saved]


@router.get("/summary", response_model=ClassAttendanceSummary)
def attendance_summary(
    class_id: int,
    month: Optional[str] = Query(default=None, pattern=r"^\d{4}-\d{2}$"),
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    classroom = get_classroom_or_404(db, class_id)
    query = db.query(AttendanceRecord).filter(AttendanceRecord.classroom_id == classroom.id)
    if month:
        try:
            start, end = month_bounds(month)
        except ValueError:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="month must be YYYY-MM")
        query = query.filter(AttendanceRecord.date >= start, AttendanceRecord.date < end)
    records = query.all()

    by_student: dict[int, list[AttendanceRecord]] = defaultdict(list)
    for record in records:
        by_student[record.student_id].append(record)

    students = [
        StudentAttendanceSummary(
            student_id=student_id,
            student_name=entries[0].student.name,
            **summarize_attendance(entries).model_dump(),
        )
        for student_id, entries in by_student.items()
    ]
    students.sort(key=lambda s: s.student_name)
    return ClassAttendanceSummary(
        class_id=classroom.id,
        month=month,
        overall=summarize_attendance(records),
        students=students,
    )
