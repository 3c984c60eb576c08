"""Endpoints for the parent/student mobile app.

Any authenticated account may call these; per-student data is gated by
``ensure_student_access``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from academy.app.api.counseling import counseling_read
from academy.app.core.constants import AnnouncementTarget, EnrollmentStatus, Role, SubmissionStatus
from academy.app.core.time import current_year_month, month_bounds
from academy.app.db.session import get_db
from academy.app.dependencies.auth import SessionContext, ensure_student_access, get_session_context
from academy.app.models.announcement import Announcement
from academy.app.models.assignment import Assignment, AssignmentSubmission
from academy.app.models.attendance import AttendanceRecord
from academy.app.models.classroom import Enrollment
from academy.app.models.counseling import CounselingRequest
from academy.app.models.grade import Grade
from academy.app.models.parent_link import ParentStudentLink
from academy.app.models.student import Student
from academy.app.schemas.announcement import AnnouncementRead
from academy.app.schemas.counseling import CounselingRead, MobileCounselingCreate
from academy.app.schemas.dashboard import AnnouncementBrief
from academy.app.schemas.mobile import (
    ChildRead,
    MobileAssignment,
    MobileAttendance,
    MobileAttendanceRecord,
    MobileClass,
    MobileDashboard,
    MobileGrade,
    MobileSubmission,
    StudentProfile,
)
from academy.app.services.reporting import summarize_attendance

router = APIRouter(prefix="/mobile", tags=["mobile"])

MOBILE_ANNOUNCEMENT_LIMIT = 20
DASHBOARD_GRADES = 5
DASHBOARD_ANNOUNCEMENTS = 3


def _active_classes(student: Student) -> list[MobileClass]:
    return [
        MobileClass(
            id=e.classroom.id,
            name=e.classroom.name,
            subject=e.classroom.subject.name,
            teacher=e.classroom.teacher.name if e.classroom.teacher else None,
            schedule=e.classroom.schedule,
        )
        for e in student.enrollments
        if e.status == EnrollmentStatus.ACTIVE
    ]


def _get_accessible_student(db: Session, ctx: SessionContext, student_id: int) -> Student:
    ensure_student_access(db, ctx, student_id)
    student = db.query(Student).filter(Student.id == student_id).first()
    if not student:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    return student


def _mobile_grade(grade: Grade) -> MobileGrade:
    return MobileGrade(
        id=grade.id,
        test_name=grade.test_name,
        score=grade.score,
        max_score=grade.max_score,
        test_date=grade.test_date,
        remarks=grade.remarks,
        classroom=grade.classroom.name,
        subject=grade.classroom.subject.name,
    )


def _mobile_announcements(db: Session, limit: int) -> list[Announcement]:
    return (
        db.query(Announcement)
        .filter(Announcement.is_active.is_(True), Announcement.target_role.in_(AnnouncementTarget.MOBILE))
        .order_by(Announcement.publish_date.desc(), Announcement.id.desc())
        .limit(limit)
        .all()
    )


@router.get("/children", response_model=list[ChildRead])
def list_children(db: Session = Depends(get_db), ctx: SessionContext = Depends(get_session_context)):
    if ctx.role != Role.PARENT:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Parent accounts only")
    links = (
        db.query(ParentStudentLink)
        .filter(ParentStudentLink.parent_user_id == ctx.user_id)
        .order_by(ParentStudentLink.id)
        .all()
    )
    return [
        ChildRead(
            id=link.student.id,
            name=link.student.name,
            student_number=link.student.student_number,
            school=link.student.school,
            grade=link.student.grade,
            status=link.student.status,
            relation=link.relation,
            classes=_active_classes(link.student),
        )
        for link in links
    ]


@router.get("/student-profile", response_model=StudentProfile)
def student_profile(ctx: SessionContext = Depends(get_session_context)):
    if ctx.role != Role.STUDENT:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Student accounts only")
    student = ctx.user.student_profile
    if student is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No student record linked to this account")
    return StudentProfile(
        id=student.id,
        name=student.name,
        student_number=student.student_number,
        school=student.school,
        grade=student.grade,
        classes=_active_classes(student),
    )


@router.get("/students/{student_id}/attendance", response_model=MobileAttendance)
def student_attendance(
    student_id: int,
    month: Optional[str] = Query(default=None, pattern=r"^\d{4}-\d{2}$"),
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    student = _get_accessible_student(db, ctx, student_id)
    query = db.query(AttendanceRecord).filter(AttendanceRecord.student_id == student.id)
    if month:
        try:
            start, end = month_bounds(month)
        except ValueError:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="month must be YYYY-MM")
        query = query.filter(AttendanceRecord.date >= start, AttendanceRecord.date < end)
    records = query.order_by(AttendanceRecord.date.desc()).all()
    return MobileAttendance(
        summary=summarize_attendance(records),
        records=[
            MobileAttendanceRecord(
                id=r.id,
                date=r.date,
                status=r.status,
                check_in_time=r.check_in_time,
                remarks=r.remarks,
                classroom=r.classroom.name,
            )
            for r in records
        ],
    )


@router.get("/students/{student_id}/grades", response_model=list[MobileGrade])
def student_grades(
    student_id: int,
    class_id: Optional[int] = None,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    student = _get_accessible_student(db, ctx, student_id)
    query = db.query(Grade).filter(Grade.student_id == student.id)
    if class_id is not None:
        query = query.filter(Grade.classroom_id == class_id)
    return [_mobile_grade(g) for g in query.order_by(Grade.test_date.desc(), Grade.id.desc()).all()]


@router.get("/students/{student_id}/assignments", response_model=list[MobileAssignment])
def student_assignments(
    student_id: int,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    student = _get_accessible_student(db, ctx, student_id)
    class_ids = [
        e.classroom_id
        for e in db.query(Enrollment)
        .filter(Enrollment.student_id == student.id, Enrollment.status == EnrollmentStatus.ACTIVE)
        .all()
    ]
    if not class_ids:
        return []

    assignments = (
        db.query(Assignment)
        .filter(Assignment.classroom_id.in_(class_ids))
        .order_by(Assignment.due_date.desc(), Assignment.id.desc())
        .all()
    )
    submissions = {
        s.assignment_id: s
        for s in db.query(AssignmentSubmission)
        .filter(
            AssignmentSubmission.student_id == student.id,
            AssignmentSubmission.assignment_id.in_([a.id for a in assignments]),
        )
        .all()
    }

    results: list[MobileAssignment] = []
    for assignment in assignments:
        submission = submissions.get(assignment.id)
        if submission is not None:
            state = MobileSubmission(
                status=submission.status,
                submitted_at=submission.submitted_at,
                score=submission.score,
                feedback=submission.feedback,
            )
        else:
            state = MobileSubmission(status=SubmissionStatus.NOT_SUBMITTED)
        results.append(
            MobileAssignment(
                id=assignment.id,
                title=assignment.title,
                description=assignment.description,
                due_date=assignment.due_date,
                assignment_date=assignment.assignment_date,
                classroom=assignment.classroom.name,
                subject=assignment.classroom.subject.name,
                submission=state,
            )
        )
    return results


@router.get("/announcements", response_model=list[AnnouncementRead])
def mobile_announcements(db: Session = Depends(get_db), ctx: SessionContext = Depends(get_session_context)):
    return _mobile_announcements(db, MOBILE_ANNOUNCEMENT_LIMIT)


@router.get("/dashboard", response_model=MobileDashboard)
def student_dashboard(
    student_id: int,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    """Summary for the app's home screen."""
    student = _get_accessible_student(db, ctx, student_id)
    recent_grades = (
        db.query(Grade)
        .filter(Grade.student_id == student.id)
        .order_by(Grade.test_date.desc(), Grade.id.desc())
        .limit(DASHBOARD_GRADES)
        .all()
    )
    start, end = month_bounds(current_year_month())
    records = (
        db.query(AttendanceRecord)
        .filter(
            AttendanceRecord.student_id == student.id,
            AttendanceRecord.date >= start,
            AttendanceRecord.date < end,
        )
        .all()
    )
    pending = (
        db.query(AssignmentSubmission)
        .filter(
            AssignmentSubmission.student_id == student.id,
            AssignmentSubmission.status == SubmissionStatus.NOT_SUBMITTED,
        )
        .count()
    )
    return MobileDashboard(
        recent_grades=[_mobile_grade(g) for g in recent_grades],
        attendance=summarize_attendance(records),
        pending_assignments=pending,
        announcements=[
            AnnouncementBrief.model_validate(a) for a in _mobile_announcements(db, DASHBOARD_ANNOUNCEMENTS)
        ],
    )


@router.get("/counseling", response_model=list[CounselingRead])
def my_counseling_requests(db: Session = Depends(get_db), ctx: SessionContext = Depends(get_session_context)):
    requests = (
        db.query(CounselingRequest)
        .filter(CounselingRequest.parent_id == ctx.user_id)
        .order_by(CounselingRequest.created_at.desc(), CounselingRequest.id.desc())
        .all()
    )
    return [counseling_read(r) for r in requests]


@router.post("/counseling", response_model=CounselingRead, status_code=status.HTTP_201_CREATED)
def request_counseling(
    payload: MobileCounselingCreate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    if ctx.role != Role.PARENT:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Parent accounts only")
    student = _get_accessible_student(db, ctx, payload.student_id)
    request = CounselingRequest(
        parent_id=ctx.user_id,
        student_id=student.id,
        title=payload.title,
        description=payload.description or None,
        counseling_type=payload.counseling_type,
        visit_message=payload.visit_message if payload.counseling_type == "VISIT" else None,
        preferred_date=payload.preferred_date,
    )
    db.add(request)
    db.commit()
    db.refresh(request)
    return counseling_read(request)
