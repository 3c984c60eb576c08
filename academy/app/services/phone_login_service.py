"""Phone-number login for the mobile app.

Two stateless steps:

1. :func:`lookup_phone` matches a phone number against students' own phones,
   their parents' phones, and existing parent accounts, and returns masked
   candidates tagged with the role a login would assume.
2. :func:`confirm_phone_login` checks the typed student name, provisions the
   backing account and parent link on first use, and issues a session token.

Nothing is kept server-side between the steps.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from academy.app.core.constants import Role, StudentStatus
from academy.app.core.exceptions import InvalidInputError, NameMismatchError, NotFoundError, UnauthorizedError
from academy.app.core.time import utc_now
from academy.app.models.parent_link import ParentStudentLink
from academy.app.models.student import Student
from academy.app.schemas.login import StudentCandidate
from academy.app.services.account_provisioning import (
    ensure_parent_link,
    find_parent_account,
    get_or_create_parent_account,
    get_or_create_student_account,
    parent_display_name,
)
from academy.app.services.auth_service import IssuedSession, issue_session

logger = logging.getLogger(__name__)

MASK_CHAR = "*"

_PHONE_SEPARATORS = re.compile(r"[-\s]")
_WHITESPACE = re.compile(r"\s")


@dataclass
class _Match:
    student: Student
    login_as: str


def normalize_phone(phone: str) -> str:
    return _PHONE_SEPARATORS.sub("", phone)


def mask_name(name: str) -> str:
    """Keep the first and last character and mask everything in between."""
    if len(name) <= 1:
        return name
    if len(name) == 2:
        return name[0] + MASK_CHAR
    return name[0] + MASK_CHAR * (len(name) - 2) + name[-1]


def names_match(typed: str, stored: str) -> bool:
    return _WHITESPACE.sub("", typed) == _WHITESPACE.sub("", stored)


def _require_phone(phone: Optional[str]) -> str:
    normalized = normalize_phone(phone or "")
    if not normalized:
        raise InvalidInputError("Phone number is required")
    return normalized


def _find_matches(db: Session, phone: str) -> dict[int, _Match]:
    matches: dict[int, _Match] = {}

    own_phone = (
        db.query(Student)
        .filter(Student.phone == phone, Student.status == StudentStatus.ACTIVE)
        .order_by(Student.id)
        .all()
    )
    for student in own_phone:
        matches[student.id] = _Match(student, Role.STUDENT)

    parent_phone = (
        db.query(Student)
        .filter(Student.parent_phone == phone, Student.status == StudentStatus.ACTIVE)
        .order_by(Student.id)
        .all()
    )
    for student in parent_phone:
        matches.setdefault(student.id, _Match(student, Role.PARENT))

    parent_account = find_parent_account(db, phone)
    if parent_account is not None:
        linked = (
            db.query(Student)
            .join(ParentStudentLink, ParentStudentLink.student_id == Student.id)
            .filter(ParentStudentLink.parent_user_id == parent_account.id)
            .order_by(Student.id)
            .all()
        )
        for student in linked:
            matches.setdefault(student.id, _Match(student, Role.PARENT))

    return matches


def find_candidates(db: Session, phone: str) -> list[StudentCandidate]:
    """Candidates for an already normalized phone number, names masked."""
    return [
        StudentCandidate(
            id=match.student.id,
            name=mask_name(match.student.name),
            school=match.student.school,
            grade=match.student.grade,
            login_as=match.login_as,
        )
        for match in _find_matches(db, phone).values()
    ]


def lookup_phone(db: Session, phone: Optional[str]) -> list[StudentCandidate]:
    normalized = _require_phone(phone)
    candidates = find_candidates(db, normalized)
    if not candidates:
        raise NotFoundError("This phone number is not registered. Please contact the academy.")
    return candidates


def confirm_phone_login(
    db: Session,
    *,
    phone: Optional[str],
    student_id: Optional[int],
    student_name: Optional[str],
    login_as: Optional[str],
) -> IssuedSession:
    normalized = _require_phone(phone)
    if student_id is None:
        raise InvalidInputError("Student selection is required")
    if not student_name or not student_name.strip():
        raise InvalidInputError("Student name is required")

    student = db.query(Student).filter(Student.id == student_id).first()
    if student is None:
        raise NotFoundError("Student not found", resource="student")

    if not names_match(student_name, student.name):
        logger.info("Phone login name mismatch for student %s", student.id)
        raise NameMismatchError()

    match = _find_matches(db, normalized).get(student.id)
    if match is None:
        raise NotFoundError("Student not found", resource="student")

    requested_role = login_as or Role.PARENT
    if requested_role != match.login_as:
        raise UnauthorizedError("Login role does not match this phone number", code="ROLE_MISMATCH")

    if requested_role == Role.STUDENT:
        account = get_or_create_student_account(db, student, normalized)
    else:
        account = get_or_create_parent_account(db, normalized, parent_display_name(student))
        ensure_parent_link(db, account, student)

    account.last_login = utc_now()
    db.commit()
    db.refresh(account)
    logger.info("Phone login succeeded for account %s as %s", account.id, account.role)
    return issue_session(account)
