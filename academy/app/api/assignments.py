"""Homework assignments and per-student submission tracking."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from academy.app.api.classes import get_classroom_or_404
from academy.app.core.constants import EnrollmentStatus, SubmissionStatus
from academy.app.core.time import utc_now
from academy.app.db.session import get_db
from academy.app.dependencies.auth import SessionContext, get_staff_context
from academy.app.models.assignment import Assignment, AssignmentSubmission
from academy.app.models.classroom import Enrollment
from academy.app.schemas.assignment import (
    AssignmentCreate,
    AssignmentRead,
    AssignmentUpdate,
    StudentSubmissionGroup,
    SubmissionRead,
    SubmissionUpdate,
)
from academy.app.services.reporting import count_turned_in, group_submissions_by_student, submission_read

router = APIRouter(prefix="/assignments", tags=["assignments"])


def _assignment_read(assignment: Assignment) -> AssignmentRead:
    submissions = sorted(assignment.submissions, key=lambda s: s.student.name)
    return AssignmentRead(
        id=assignment.id,
        classroom_id=assignment.classroom_id,
        title=assignment.title,
        description=assignment.description,
        assignment_date=assignment.assignment_date,
        due_date=assignment.due_date,
        submissions=[submission_read(s) for s in submissions],
        submission_count=count_turned_in(submissions),
        total_count=len(submissions),
    )


def _get_assignment(db: Session, assignment_id: int) -> Assignment:
    assignment = db.query(Assignment).filter(Assignment.id == assignment_id).first()
    if not assignment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Assignment not found")
    return assignment


@router.get("/", response_model=list[AssignmentRead])
def list_assignments(class_id: int, db: Session = Depends(get_db), ctx: SessionContext = Depends(get_staff_context)):
    assignments = (
        db.query(Assignment)
        .filter(Assignment.classroom_id == class_id)
        .order_by(Assignment.due_date.desc(), Assignment.id.desc())
        .all()
    )
    return [_assignment_read(a) for a in assignments]


@router.post("/", response_model=AssignmentRead, status_code=status.HTTP_201_CREATED)
def create_assignment(
    assignment_in: AssignmentCreate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    classroom = get_classroom_or_404(db, assignment_in.class_id)
    if assignment_in.due_date < assignment_in.assignment_date:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Due date precedes assignment date")

    assignment = Assignment(
        classroom_id=classroom.id,
        title=assignment_in.title,
        description=assignment_in.description or None,
        assignment_date=assignment_in.assignment_date,
        due_date=assignment_in.due_date,
    )
    db.add(assignment)
    db.flush()

    # Every student currently in the class starts as NOT_SUBMITTED
    enrollments = (
        db.query(Enrollment)
        .filter(Enrollment.classroom_id == classroom.id, Enrollment.status == EnrollmentStatus.ACTIVE)
        .all()
    )
    for enrollment in enrollments:
        db.add(
            AssignmentSubmission(
                assignment_id=assignment.id,
                student_id=enrollment.student_id,
                status=SubmissionStatus.NOT_SUBMITTED,
            )
        )
    db.commit()
    db.refresh(assignment)
    return _assignment_read(assignment)


@router.get("/by-student", response_model=list[StudentSubmissionGroup])
def submissions_by_student(
    class_id: int,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    submissions = (
        db.query(AssignmentSubmission)
        .join(Assignment, AssignmentSubmission.assignment_id == Assignment.id)
        .filter(Assignment.classroom_id == class_id)
        .order_by(Assignment.due_date.asc(), AssignmentSubmission.id)
        .all()
    )
    return group_submissions_by_student(submissions)


@router.get("/{assignment_id}", response_model=AssignmentRead)
def get_assignment(assignment_id: int, db: Session = Depends(get_db), ctx: SessionContext = Depends(get_staff_context)):
    return _assignment_read(_get_assignment(db, assignment_id))


@router.put("/{assignment_id}", response_model=AssignmentRead)
def update_assignment(
    assignment_id: int,
    assignment_in: AssignmentUpdate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    assignment = _get_assignment(db, assignment_id)
    for field, value in assignment_in.model_dump(exclude_unset=True).items():
        if field == "description" or value is not None:
            setattr(assignment, field, value)
    db.commit()
    db.refresh(assignment)
    return _assignment_read(assignment)


@router.delete("/{assignment_id}")
def delete_assignment(assignment_id: int, db: Session = Depends(get_db), ctx: SessionContext = Depends(get_staff_context)):
    assignment = _get_assignment(db, assignment_id)
    db.delete(assignment)
    db.commit()
    return {"status": "deleted", "id": assignment_id}


@router.put("/{assignment_id}/submissions", response_model=SubmissionRead)
def update_submission(
    assignment_id: int,
    payload: SubmissionUpdate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    assignment = _get_assignment(db, assignment_id)
    submission = (
        db.query(AssignmentSubmission)
        .filter(
            AssignmentSubmission.assignment_id == assignment.id,
            AssignmentSubmission.student_id == payload.student_id,
        )
        .first()
    )
    if submission is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Submission not found")

    submission.status = payload.status
    submission.score = payload.score
    submission.feedback = payload.feedback
    if payload.status in SubmissionStatus.TURNED_IN:
        submission.submitted_at = submission.submitted_at or utc_now()
    else:
        submission.submitted_at = None
    db.commit()
    db.refresh(submission)
    return submission_read(submission)
