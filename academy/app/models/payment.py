"""Monthly tuition payment records."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from academy.app.db.base_class import Base
from academy.app.core.time import utc_now


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    year_month = Column(String(7), nullable=False, index=True)
    tuition_fee = Column(Integer, nullable=False, default=0)
    special_fee = Column(Integer, nullable=False, default=0)
    other_fee = Column(Integer, nullable=False, default=0)
    total_fee = Column(Integer, nullable=False, default=0)
    status = Column(String(20), nullable=False, default="INPUT_DONE")
    remarks = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    __table_args__ = (
        UniqueConstraint("student_id", "year_month", name="uq_payment_student_month"),
    )

    student = relationship("Student", back_populates="payments")
