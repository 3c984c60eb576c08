"""Front-desk dashboard figures."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from academy.app.core.constants import AttendanceStatus, ClassStatus, CounselingStatus, StudentStatus
from academy.app.core.time import today
from academy.app.db.session import get_db
from academy.app.dependencies.auth import SessionContext, get_staff_context
from academy.app.models.announcement import Announcement
from academy.app.models.attendance import AttendanceRecord
from academy.app.models.classroom import Classroom
from academy.app.models.counseling import CounselingRequest
from academy.app.models.student import Student
from academy.app.schemas.dashboard import AnnouncementBrief, DashboardResponse, DashboardStats

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

RECENT_ANNOUNCEMENTS = 5


@router.get("/", response_model=DashboardResponse)
def get_dashboard(db: Session = Depends(get_db), ctx: SessionContext = Depends(get_staff_context)):
    stats = DashboardStats(
        total_students=db.query(Student).filter(Student.status == StudentStatus.ACTIVE).count(),
        total_classes=db.query(Classroom).filter(Classroom.status == ClassStatus.ACTIVE).count(),
        today_attendance=(
            db.query(AttendanceRecord)
            .filter(AttendanceRecord.date == today(), AttendanceRecord.status == AttendanceStatus.PRESENT)
            .count()
        ),
        pending_counseling=(
            db.query(CounselingRequest).filter(CounselingRequest.status == CounselingStatus.PENDING).count()
        ),
    )
    announcements = (
        db.query(Announcement)
        .order_by(Announcement.publish_date.desc(), Announcement.id.desc())
        .limit(RECENT_ANNOUNCEMENTS)
        .all()
    )
    return DashboardResponse(
        stats=stats,
        announcements=[AnnouncementBrief.model_validate(a) for a in announcements],
    )
