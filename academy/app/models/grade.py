from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from academy.app.db.base_class import Base
from academy.app.core.time import utc_now


class Grade(Base):
    __tablename__ = "grades"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    classroom_id = Column(Integer, ForeignKey("classrooms.id", ondelete="CASCADE"), nullable=False, index=True)
    test_name = Column(String(100), nullable=False)
    test_date = Column(Date, nullable=False)
    score = Column(Float, nullable=False)
    max_score = Column(Float, nullable=False, default=100)
    remarks = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)

    student = relationship("Student", back_populates="grades")
    classroom = relationship("Classroom", back_populates="grades")
