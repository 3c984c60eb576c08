"""Class (classroom) endpoints, including enrollment."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from academy.app.core.constants import EnrollmentStatus, Role
from academy.app.core.exceptions import ConflictError
from academy.app.db.session import get_db
from academy.app.dependencies.auth import SessionContext, get_staff_context
from academy.app.models.classroom import Classroom, Enrollment, Subject
from academy.app.models.student import Student
from academy.app.models.user import User
from academy.app.schemas.classroom import (
    ClassCreate,
    ClassDetail,
    ClassRead,
    ClassStatusValue,
    ClassUpdate,
    EnrollmentRead,
    EnrollRequest,
    RosterEntry,
)

router = APIRouter(prefix="/classes", tags=["classes"])


def get_classroom_or_404(db: Session, class_id: int) -> Classroom:
    classroom = db.query(Classroom).filter(Classroom.id == class_id).first()
    if not classroom:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Class not found")
    return classroom


def _active_enrollments(classroom: Classroom) -> list[Enrollment]:
    return [e for e in classroom.enrollments if e.status == EnrollmentStatus.ACTIVE]


def _class_read(classroom: Classroom) -> ClassRead:
    data = ClassRead.model_validate(classroom)
    data.enrollment_count = len(_active_enrollments(classroom))
    return data


def _class_detail(classroom: Classroom) -> ClassDetail:
    detail = ClassDetail(**_class_read(classroom).model_dump())
    detail.roster = sorted(
        (
            RosterEntry(
                student_id=e.student.id,
                name=e.student.name,
                student_number=e.student.student_number,
                school=e.student.school,
                grade=e.student.grade,
                enrollment_status=e.status,
            )
            for e in classroom.enrollments
        ),
        key=lambda entry: entry.name,
    )
    return detail


def _validate_refs(db: Session, subject_id: Optional[int], teacher_id: Optional[int]) -> None:
    if subject_id is not None and not db.query(Subject).filter(Subject.id == subject_id).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Subject not found")
    if teacher_id is not None:
        teacher = db.query(User).filter(User.id == teacher_id, User.role.in_(Role.STAFF_ROLES)).first()
        if not teacher:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Teacher not found")


@router.get("/", response_model=list[ClassRead])
def list_classes(
    status_filter: Optional[ClassStatusValue] = Query(default=None, alias="status"),
    subject_id: Optional[int] = None,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    query = db.query(Classroom)
    if status_filter:
        query = query.filter(Classroom.status == status_filter)
    if subject_id is not None:
        query = query.filter(Classroom.subject_id == subject_id)
    return [_class_read(c) for c in query.order_by(Classroom.created_at.desc(), Classroom.id.desc()).all()]


@router.post("/", response_model=ClassRead, status_code=status.HTTP_201_CREATED)
def create_class(
    class_in: ClassCreate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    _validate_refs(db, class_in.subject_id, class_in.teacher_id)
    classroom = Classroom(
        name=class_in.name,
        subject_id=class_in.subject_id,
        teacher_id=class_in.teacher_id,
        schedule=class_in.schedule,
        max_capacity=class_in.max_capacity,
    )
    db.add(classroom)
    db.commit()
    db.refresh(classroom)
    return _class_read(classroom)


@router.get("/{class_id}", response_model=ClassDetail)
def get_class(class_id: int, db: Session = Depends(get_db), ctx: SessionContext = Depends(get_staff_context)):
    return _class_detail(get_classroom_or_404(db, class_id))


@router.put("/{class_id}", response_model=ClassRead)
def update_class(
    class_id: int,
    class_in: ClassUpdate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    classroom = get_classroom_or_404(db, class_id)
    _validate_refs(db, class_in.subject_id, class_in.teacher_id)
    for field, value in class_in.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(classroom, field, value)
    db.commit()
    db.refresh(classroom)
    return _class_read(classroom)


@router.delete("/{class_id}")
def delete_class(class_id: int, db: Session = Depends(get_db), ctx: SessionContext = Depends(get_staff_context)):
    classroom = get_classroom_or_404(db, class_id)
    db.delete(classroom)
    db.commit()
    return {"status": "deleted", "id": class_id}


@router.post("/{class_id}/enroll", response_model=EnrollmentRead, status_code=status.HTTP_201_CREATED)
def enroll_student(
    class_id: int,
    payload: EnrollRequest,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    classroom = get_classroom_or_404(db, class_id)
    student = db.query(Student).filter(Student.id == payload.student_id).first()
    if not student:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")

    existing = (
        db.query(Enrollment)
        .filter(Enrollment.classroom_id == classroom.id, Enrollment.student_id == student.id)
        .first()
    )
    if existing and existing.status == EnrollmentStatus.ACTIVE:
        raise ConflictError("Student is already enrolled in this class")
    if len(_active_enrollments(classroom)) >= classroom.max_capacity:
        raise ConflictError("Class is full")

    if existing:
        existing.status = EnrollmentStatus.ACTIVE
        enrollment = existing
    else:
        enrollment = Enrollment(student_id=student.id, classroom_id=classroom.id)
        db.add(enrollment)
    db.commit()
    db.refresh(enrollment)
    return enrollment


@router.delete("/{class_id}/enroll/{student_id}")
def withdraw_student(
    class_id: int,
    student_id: int,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    enrollment = (
        db.query(Enrollment)
        .filter(Enrollment.classroom_id == class_id, Enrollment.student_id == student_id)
        .first()
    )
    if not enrollment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Enrollment not found")
    enrollment.status = EnrollmentStatus.WITHDRAWN
    db.commit()
    return {"status": "withdrawn", "class_id": class_id, "student_id": student_id}
