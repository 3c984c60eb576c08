from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, func, text
from sqlalchemy.orm import relationship

from academy.app.db.base_class import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False)
    hashed_password = Column(String, nullable=True)
    role = Column(String(20), nullable=False, default="STAFF")
    phone = Column(String(50), nullable=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # One parent account per phone number
    __table_args__ = (
        Index(
            "uq_users_parent_phone",
            "phone",
            unique=True,
            sqlite_where=text("role = 'PARENT'"),
            postgresql_where=text("role = 'PARENT'"),
        ),
    )

    student_profile = relationship("Student", back_populates="user", uselist=False, foreign_keys="Student.user_id")
    parent_links = relationship("ParentStudentLink", back_populates="parent_user", cascade="all, delete-orphan", foreign_keys="ParentStudentLink.parent_user_id")
    taught_classes = relationship("Classroom", back_populates="teacher", foreign_keys="Classroom.teacher_id")
