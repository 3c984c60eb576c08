from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from academy.app.db.base_class import Base
from academy.app.core.time import utc_now


class CounselingRequest(Base):
    __tablename__ = "counseling_requests"

    id = Column(Integer, primary_key=True, index=True)
    parent_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    counseling_type = Column(String(20), nullable=False, default="PHONE")
    visit_message = Column(Text, nullable=True)
    preferred_date = Column(Date, nullable=True)
    status = Column(String(20), nullable=False, default="PENDING")
    admin_notes = Column(Text, nullable=True)
    session_date = Column(Date, nullable=True)
    session_notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    parent = relationship("User", foreign_keys=[parent_id])
    student = relationship("Student", back_populates="counseling_requests")
