from datetime import datetime

from pydantic import BaseModel, ConfigDict


class DashboardStats(BaseModel):
    total_students: int
    total_classes: int
    today_attendance: int
    pending_counseling: int


class AnnouncementBrief(BaseModel):
    id: int
    title: str
    content: str
    publish_date: datetime
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DashboardResponse(BaseModel):
    stats: DashboardStats
    announcements: list[AnnouncementBrief]
