from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String, Text

from academy.app.db.base_class import Base
from academy.app.core.time import utc_now


class Announcement(Base):
    __tablename__ = "announcements"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    target_role = Column(String(20), nullable=False, default="ALL")
    is_active = Column(Boolean, nullable=False, default=True)
    publish_date = Column(DateTime, nullable=False, default=utc_now)
    expiry_date = Column(Date, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)
