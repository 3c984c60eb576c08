"""Sign-up requests: public submission, admin review."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from academy.app.core.exceptions import InvalidInputError
from academy.app.db.session import get_db
from academy.app.dependencies.auth import SessionContext, get_admin_context
from academy.app.models.signup_request import SignupRequest
from academy.app.schemas.signup_request import (
    SignupRequestCreate,
    SignupRequestCreated,
    SignupRequestDecision,
    SignupRequestRead,
)
from academy.app.services.student_service import clean_phone

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/signup-requests", tags=["signup-requests"])


def _get_request(db: Session, request_id: int) -> SignupRequest:
    request = db.query(SignupRequest).filter(SignupRequest.id == request_id).first()
    if not request:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Signup request not found")
    return request


@router.post("/", response_model=SignupRequestCreated, status_code=status.HTTP_201_CREATED)
def submit_signup_request(payload: SignupRequestCreate, db: Session = Depends(get_db)):
    parent_phone = clean_phone(payload.parent_phone)
    if not payload.student_name or not payload.student_name.strip() or not parent_phone:
        raise InvalidInputError("Student name and parent phone are required")

    request = SignupRequest(
        student_name=payload.student_name.strip(),
        school=payload.school or None,
        grade=payload.grade or None,
        parent_name=payload.parent_name or None,
        parent_phone=parent_phone,
        student_phone=clean_phone(payload.student_phone),
        message=payload.message or None,
    )
    db.add(request)
    db.commit()
    db.refresh(request)
    logger.info("Signup request %s submitted", request.id)
    return SignupRequestCreated(id=request.id)


@router.get("/", response_model=list[SignupRequestRead])
def list_signup_requests(
    status_filter: Optional[str] = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_admin_context),
):
    query = db.query(SignupRequest)
    if status_filter:
        query = query.filter(SignupRequest.status == status_filter)
    return query.order_by(SignupRequest.created_at.desc(), SignupRequest.id.desc()).all()


@router.patch("/{request_id}", response_model=SignupRequestRead)
def decide_signup_request(
    request_id: int,
    decision: SignupRequestDecision,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_admin_context),
):
    request = _get_request(db, request_id)
    request.status = decision.status
    request.admin_notes = decision.admin_notes or None
    db.commit()
    db.refresh(request)
    logger.info("Signup request %s marked %s by account %s", request.id, request.status, ctx.user_id)
    return request


@router.delete("/{request_id}")
def delete_signup_request(
    request_id: int,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_admin_context),
):
    request = _get_request(db, request_id)
    db.delete(request)
    db.commit()
    return {"status": "deleted", "id": request_id}
