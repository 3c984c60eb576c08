"""Monthly tuition tracking endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from academy.app.core.constants import PaymentStatus, StudentStatus
from academy.app.core.time import current_year_month
from academy.app.db.session import get_db
from academy.app.dependencies.auth import SessionContext, get_staff_context
from academy.app.models.payment import Payment
from academy.app.models.student import Student
from academy.app.schemas.payment import (
    MonthlyPaymentList,
    MonthlyPaymentRow,
    PaymentRead,
    PaymentUpdate,
    PaymentUpsert,
)

router = APIRouter(prefix="/payments", tags=["payments"])

_FEE_FIELDS = ("tuition_fee", "special_fee", "other_fee")


def _recompute_total(payment: Payment) -> None:
    payment.total_fee = sum(getattr(payment, field) or 0 for field in _FEE_FIELDS)


@router.get("/", response_model=MonthlyPaymentList)
def list_monthly_payments(
    year_month: Optional[str] = Query(default=None, pattern=r"^\d{4}-\d{2}$"),
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    month = year_month or current_year_month()
    students = (
        db.query(Student)
        .filter(Student.status == StudentStatus.ACTIVE)
        .order_by(Student.name.asc(), Student.id.asc())
        .all()
    )
    payments = (
        db.query(Payment)
        .join(Student, Payment.student_id == Student.id)
        .filter(Payment.year_month == month, Student.status == StudentStatus.ACTIVE)
        .all()
    )
    payment_map = {p.student_id: PaymentRead.model_validate(p) for p in payments}

    # Students without a record for the month still get a row
    rows = [
        MonthlyPaymentRow(
            student_id=student.id,
            student_name=student.name,
            student_number=student.student_number,
            grade=student.grade,
            school=student.school,
            payment=payment_map.get(student.id),
        )
        for student in students
    ]
    return MonthlyPaymentList(year_month=month, data=rows)


@router.post("/", response_model=PaymentRead)
def upsert_payment(
    payload: PaymentUpsert,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    if not db.query(Student).filter(Student.id == payload.student_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")

    payment = (
        db.query(Payment)
        .filter(Payment.student_id == payload.student_id, Payment.year_month == payload.year_month)
        .first()
    )
    if payment is None:
        payment = Payment(
            student_id=payload.student_id,
            year_month=payload.year_month,
            tuition_fee=payload.tuition_fee or 0,
            special_fee=payload.special_fee or 0,
            other_fee=payload.other_fee or 0,
            remarks=payload.remarks or None,
            status=payload.status or PaymentStatus.INPUT_DONE,
        )
        db.add(payment)
    else:
        for field in _FEE_FIELDS:
            value = getattr(payload, field)
            if value is not None:
                setattr(payment, field, value)
        if "remarks" in payload.model_fields_set:
            payment.remarks = payload.remarks
        if payload.status:
            payment.status = payload.status
    _recompute_total(payment)
    db.commit()
    db.refresh(payment)
    return payment


@router.get("/history", response_model=list[PaymentRead])
def payment_history(
    student_id: int,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    return (
        db.query(Payment)
        .filter(Payment.student_id == student_id)
        .order_by(Payment.year_month.desc())
        .all()
    )


@router.patch("/{payment_id}", response_model=PaymentRead)
def update_payment(
    payment_id: int,
    payload: PaymentUpdate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    payment = db.query(Payment).filter(Payment.id == payment_id).first()
    if not payment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Payment not found")
    for field, value in payload.model_dump(exclude_unset=True).items():
        if field == "remarks" or value is not None:
            setattr(payment, field, value)
    _recompute_total(payment)
    db.commit()
    db.refresh(payment)
    return payment


@router.delete("/{payment_id}")
def delete_payment(payment_id: int, db: Session = Depends(get_db), ctx: SessionContext = Depends(get_staff_context)):
    payment = db.query(Payment).filter(Payment.id == payment_id).first()
    if not payment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Payment not found")
    db.delete(payment)
    db.commit()
    return {"status": "deleted", "id": payment_id}
