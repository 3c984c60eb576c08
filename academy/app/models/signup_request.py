"""Enrollment sign-up requests submitted from outside the academy."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from academy.app.db.base_class import Base
from academy.app.core.time import utc_now


class SignupRequest(Base):
    __tablename__ = "signup_requests"

    id = Column(Integer, primary_key=True, index=True)
    student_name = Column(String(100), nullable=False)
    school = Column(String(100), nullable=True)
    grade = Column(String(20), nullable=True)
    parent_name = Column(String(100), nullable=True)
    parent_phone = Column(String(50), nullable=False)
    student_phone = Column(String(50), nullable=True)
    message = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="PENDING")
    admin_notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)
