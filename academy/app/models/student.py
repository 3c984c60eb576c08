"""Student model."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from academy.app.db.base_class import Base
from academy.app.core.time import utc_now


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    student_number = Column(String(20), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False, index=True)
    date_of_birth = Column(Date, nullable=True)
    phone = Column(String(50), nullable=True, index=True)
    parent_phone = Column(String(50), nullable=True, index=True)
    school = Column(String(100), nullable=True)
    grade = Column(String(20), nullable=True)
    status = Column(String(20), nullable=False, default="ACTIVE")
    withdrawal_reason = Column(Text, nullable=True)
    withdrawal_date = Column(Date, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, unique=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    user = relationship("User", back_populates="student_profile", foreign_keys=[user_id])
    parent_links = relationship("ParentStudentLink", back_populates="student", cascade="all, delete-orphan", foreign_keys="ParentStudentLink.student_id")
    enrollments = relationship("Enrollment", back_populates="student", cascade="all, delete-orphan")
    attendance_records = relationship("AttendanceRecord", back_populates="student", cascade="all, delete-orphan")
    grades = relationship("Grade", back_populates="student", cascade="all, delete-orphan")
    submissions = relationship("AssignmentSubmission", back_populates="student", cascade="all, delete-orphan")
    counseling_requests = relationship("CounselingRequest", back_populates="student", cascade="all, delete-orphan")
    payments = relationship("Payment", back_populates="student", cascade="all, delete-orphan")
