"""Aggregations over attendance, grades and assignment submissions."""

from collections import Counter, defaultdict
from typing import Iterable

from academy.app.core.constants import AttendanceStatus, SubmissionStatus
from academy.app.models.assignment import AssignmentSubmission
from academy.app.models.attendance import AttendanceRecord
from academy.app.models.grade import Grade
from academy.app.schemas.assignment import StudentSubmissionGroup, SubmissionRead
from academy.app.schemas.attendance import AttendanceSummary
from academy.app.schemas.grade import ExamSummary


def summarize_attendance(records: Iterable[AttendanceRecord]) -> AttendanceSummary:
    counts = Counter(record.status for record in records)
    total = sum(counts.values())
    # Late arrivals and early leaves still count as attended
    attended = counts[AttendanceStatus.PRESENT] + counts[AttendanceStatus.LATE] + counts[AttendanceStatus.EARLY_LEAVE]
    rate = round(attended / total * 100, 1) if total else 0.0
    return AttendanceSummary(
        total=total,
        present=counts[AttendanceStatus.PRESENT],
        absent=counts[AttendanceStatus.ABSENT],
        late=counts[AttendanceStatus.LATE],
        early_leave=counts[AttendanceStatus.EARLY_LEAVE],
        excused=counts[AttendanceStatus.EXCUSED],
        attendance_rate=rate,
    )


def summarize_grades(grades: Iterable[Grade]) -> list[ExamSummary]:
    """One summary per (test name, test date), most recent test first."""
    by_test: dict[tuple, list[Grade]] = defaultdict(list)
    for grade in grades:
        by_test[(grade.test_name, grade.test_date)].append(grade)

    summaries: list[ExamSummary] = []
    for (test_name, test_date), entries in by_test.items():
        scores = [g.score for g in entries]
        percentages = [g.score / g.max_score * 100 for g in entries if g.max_score]
        summaries.append(
            ExamSummary(
                test_name=test_name,
                test_date=test_date,
                count=len(entries),
                average_score=round(sum(scores) / len(scores), 2),
                average_percentage=round(sum(percentages) / len(percentages), 2) if percentages else 0.0,
                highest_score=max(scores),
                lowest_score=min(scores),
            )
        )
    summaries.sort(key=lambda s: (s.test_date, s.test_name), reverse=True)
    return summaries


def submission_read(submission: AssignmentSubmission) -> SubmissionRead:
    data = SubmissionRead.model_validate(submission)
    data.student_name = submission.student.name if submission.student else None
    return data


def count_turned_in(submissions: Iterable[AssignmentSubmission]) -> int:
    return sum(1 for s in submissions if s.status in SubmissionStatus.TURNED_IN)


def group_submissions_by_student(submissions: Iterable[AssignmentSubmission]) -> list[StudentSubmissionGroup]:
    grouped: dict[int, list[AssignmentSubmission]] = defaultdict(list)
    for submission in submissions:
        grouped[submission.student_id].append(submission)

    groups: list[StudentSubmissionGroup] = []
    for student_id, entries in grouped.items():
        groups.append(
            StudentSubmissionGroup(
                student_id=student_id,
                student_name=entries[0].student.name,
                submitted_count=count_turned_in(entries),
                total_count=len(entries),
                submissions=[submission_read(s) for s in entries],
            )
        )
    groups.sort(key=lambda g: g.student_name)
    return groups
