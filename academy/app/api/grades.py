"""Test score endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from academy.app.api.classes import get_classroom_or_404
from academy.app.db.session import get_db
from academy.app.dependencies.auth import SessionContext, get_staff_context
from academy.app.models.grade import Grade
from academy.app.models.student import Student
from academy.app.schemas.grade import ExamSummary, GradeBatch, GradeRead, GradeUpdate
from academy.app.services.reporting import summarize_grades

router = APIRouter(prefix="/grades", tags=["grades"])


def _grade_read(grade: Grade) -> GradeRead:
    data = GradeRead.model_validate(grade)
    data.student_name = grade.student.name if grade.student else None
    return data


def _get_grade(db: Session, grade_id: int) -> Grade:
    grade = db.query(Grade).filter(Grade.id == grade_id).first()
    if not grade:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Grade not found")
    return grade


@router.get("/", response_model=list[GradeRead])
def list_grades(
    class_id: int,
    test_name: Optional[str] = None,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    query = db.query(Grade).filter(Grade.classroom_id == class_id)
    if test_name:
        query = query.filter(Grade.test_name == test_name)
    return [_grade_read(g) for g in query.order_by(Grade.test_date.desc(), Grade.id).all()]


@router.post("/", response_model=list[GradeRead], status_code=status.HTTP_201_CREATED)
def record_grades(
    batch: GradeBatch,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    classroom = get_classroom_or_404(db, batch.class_id)
    created: list[Grade] = []
    for entry in batch.grades:
        if not db.query(Student).filter(Student.id == entry.student_id).first():
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student {entry.student_id} not found")
        if entry.max_score <= 0:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="max_score must be positive")
        grade = Grade(
            student_id=entry.student_id,
            classroom_id=classroom.id,
            test_name=batch.test_name,
            test_date=batch.test_date,
            score=entry.score,
            max_score=entry.max_score,
            remarks=entry.remarks or None,
        )
        db.add(grade)
        created.append(grade)
    db.commit()
    for grade in created:
        db.refresh(grade)
    return [_grade_read(g) for g in created]


@router.get("/summary", response_model=list[ExamSummary])
def grade_summary(
    class_id: int,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    classroom = get_classroom_or_404(db, class_id)
    return summarize_grades(db.query(Grade).filter(Grade.classroom_id == classroom.id).all())


@router.put("/{grade_id}", response_model=GradeRead)
def update_grade(
    grade_id: int,
    grade_in: GradeUpdate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    grade = _get_grade(db, grade_id)
    for field, value in grade_in.model_dump(exclude_unset=True).items():
        if field == "remarks" or value is not None:
            setattr(grade, field, value)
    db.commit()
    db.refresh(grade)
    return _grade_read(grade)


@router.delete("/{grade_id}")
def delete_grade(grade_id: int, db: Session = Depends(get_db), ctx: SessionContext = Depends(get_staff_context)):
    grade = _get_grade(db, grade_id)
    db.delete(grade)
    db.commit()
    return {"status": "deleted", "id": grade_id}
