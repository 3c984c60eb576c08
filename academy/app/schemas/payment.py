"""Monthly payment schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

PaymentStatusValue = Literal["INPUT_DONE", "BILLED", "PAID", "UNPAID"]


class PaymentUpsert(BaseModel):
    student_id: int
    year_month: str = Field(pattern=r"^\d{4}-\d{2}$")
    tuition_fee: Optional[int] = None
    special_fee: Optional[int] = None
    other_fee: Optional[int] = None
    remarks: Optional[str] = None
    status: Optional[PaymentStatusValue] = None


class PaymentUpdate(BaseModel):
    tuition_fee: Optional[int] = None
    special_fee: Optional[int] = None
    other_fee: Optional[int] = None
    remarks: Optional[str] = None
    status: Optional[PaymentStatusValue] = None


class PaymentRead(BaseModel):
    id: int
    student_id: int
    year_month: str
    tuition_fee: int
    special_fee: int
    other_fee: int
    total_fee: int
    status: str
    remarks: Optional[str] = None
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MonthlyPaymentRow(BaseModel):
    student_id: int
    student_name: str
    student_number: str
    grade: Optional[str] = None
    school: Optional[str] = None
    payment: Optional[PaymentRead] = None


class MonthlyPaymentList(BaseModel):
    year_month: str
    data: list[MonthlyPaymentRow]
