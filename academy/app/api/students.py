"""Student endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from academy.app.db.session import get_db
from academy.app.dependencies.auth import SessionContext, get_staff_context
from academy.app.models.student import Student
from academy.app.schemas.student import (
    ClassSummary,
    ParentSummary,
    StudentCreate,
    StudentDetail,
    StudentRead,
    StudentStatusValue,
    StudentUpdate,
)
from academy.app.services.student_service import clean_phone, next_student_number

router = APIRouter(prefix="/students", tags=["students"])

_PHONE_FIELDS = ("phone", "parent_phone")


def _get_student(db: Session, student_id: int) -> Student:
    student = db.query(Student).filter(Student.id == student_id).first()
    if not student:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    return student


def _student_detail(student: Student) -> StudentDetail:
    detail = StudentDetail.model_validate(student)
    detail.parents = [
        ParentSummary(id=link.parent_user.id, name=link.parent_user.name, phone=link.parent_user.phone)
        for link in student.parent_links
        if link.parent_user is not None
    ]
    detail.classes = [
        ClassSummary(
            id=enrollment.classroom.id,
            name=enrollment.classroom.name,
            subject=enrollment.classroom.subject.name if enrollment.classroom.subject else None,
        )
        for enrollment in student.enrollments
    ]
    return detail


@router.get("/", response_model=list[StudentRead])
def list_students(
    status_filter: Optional[StudentStatusValue] = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    query = db.query(Student)
    if status_filter:
        query = query.filter(Student.status == status_filter)
    return query.order_by(Student.created_at.desc(), Student.id.desc()).all()


@router.post("/", response_model=StudentDetail, status_code=status.HTTP_201_CREATED)
def create_student(
    student_in: StudentCreate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    if not student_in.name.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Name is required")
    student_number = student_in.student_number or next_student_number(db)
    if db.query(Student).filter(Student.student_number == student_number).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Student number already in use")

    student = Student(
        name=student_in.name.strip(),
        student_number=student_number,
        date_of_birth=student_in.date_of_birth,
        phone=clean_phone(student_in.phone),
        parent_phone=clean_phone(student_in.parent_phone),
        school=student_in.school,
        grade=student_in.grade,
        status=student_in.status,
    )
    db.add(student)
    db.commit()
    db.refresh(student)
    return _student_detail(student)


@router.get("/{student_id}", response_model=StudentDetail)
def get_student(
    student_id: int,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    return _student_detail(_get_student(db, student_id))


@router.put("/{student_id}", response_model=StudentDetail)
def update_student(
    student_id: int,
    student_in: StudentUpdate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    student = _get_student(db, student_id)
    for field, value in student_in.model_dump(exclude_unset=True).items():
        if field in _PHONE_FIELDS:
            value = clean_phone(value)
        elif field in ("name", "status") and value is None:
            continue
        setattr(student, field, value)
    db.commit()
    db.refresh(student)
    return _student_detail(student)


@router.delete("/{student_id}")
def delete_student(
    student_id: int,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    student = _get_student(db, student_id)
    if student.user is not None:
        # Sessions issued to the student stop resolving
        student.user.is_active = False
    db.delete(student)
    db.commit()
    return {"status": "deleted", "id": student_id}
