"""Sign-up request schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


class SignupRequestCreate(BaseModel):
    student_name: Optional[str] = None
    parent_phone: Optional[str] = None
    school: Optional[str] = None
    grade: Optional[str] = None
    parent_name: Optional[str] = None
    student_phone: Optional[str] = None
    message: Optional[str] = None


class SignupRequestCreated(BaseModel):
    id: int
    message: str = "Your request has been received. The academy will contact you."


class SignupRequestDecision(BaseModel):
    status: Literal["APPROVED", "REJECTED"]
    admin_notes: Optional[str] = None


class SignupRequestRead(BaseModel):
    id: int
    student_name: str
    school: Optional[str] = None
    grade: Optional[str] = None
    parent_name: Optional[str] = None
    parent_phone: str
    student_phone: Optional[str] = None
    message: Optional[str] = None
    status: str
    admin_notes: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
