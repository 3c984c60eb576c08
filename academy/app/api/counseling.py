"""Counseling request endpoints for desk staff."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from academy.app.db.session import get_db
from academy.app.dependencies.auth import SessionContext, get_staff_context
from academy.app.models.counseling import CounselingRequest
from academy.app.models.student import Student
from academy.app.models.user import User
from academy.app.schemas.counseling import (
    CounselingCreate,
    CounselingRead,
    CounselingStatusValue,
    CounselingUpdate,
)

router = APIRouter(prefix="/counseling", tags=["counseling"])


def counseling_read(request: CounselingRequest) -> CounselingRead:
    data = CounselingRead.model_validate(request)
    data.student_name = request.student.name if request.student else None
    return data


def _get_request(db: Session, request_id: int) -> CounselingRequest:
    request = db.query(CounselingRequest).filter(CounselingRequest.id == request_id).first()
    if not request:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Counseling request not found")
    return request


@router.get("/", response_model=list[CounselingRead])
def list_counseling(
    status_filter: Optional[CounselingStatusValue] = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    query = db.query(CounselingRequest)
    if status_filter:
        query = query.filter(CounselingRequest.status == status_filter)
    return [counseling_read(r) for r in query.order_by(CounselingRequest.created_at.desc(), CounselingRequest.id.desc()).all()]


@router.post("/", response_model=CounselingRead, status_code=status.HTTP_201_CREATED)
def create_counseling(
    payload: CounselingCreate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    if not db.query(Student).filter(Student.id == payload.student_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    if payload.parent_id is not None and not db.query(User).filter(User.id == payload.parent_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Parent not found")

    request = CounselingRequest(**payload.model_dump())
    db.add(request)
    db.commit()
    db.refresh(request)
    return counseling_read(request)


@router.get("/{request_id}", response_model=CounselingRead)
def get_counseling(request_id: int, db: Session = Depends(get_db), ctx: SessionContext = Depends(get_staff_context)):
    return counseling_read(_get_request(db, request_id))


@router.put("/{request_id}", response_model=CounselingRead)
def update_counseling(
    request_id: int,
    payload: CounselingUpdate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    request = _get_request(db, request_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if field == "status" and value is None:
            continue
        setattr(request, field, value)
    db.commit()
    db.refresh(request)
    return counseling_read(request)


@router.delete("/{request_id}")
def delete_counseling(request_id: int, db: Session = Depends(get_db), ctx: SessionContext = Depends(get_staff_context)):
    request = _get_request(db, request_id)
    db.delete(request)
    db.commit()
    return {"status": "deleted", "id": request_id}
