"""Lazy creation of login accounts for students and parents.

Every helper is idempotent: it returns the existing row when there is one.
When two requests race to create the same account or link, the database
rejects the loser through a uniqueness constraint or a conditional claim;
that request rolls back and returns the row the winner created.
"""

import logging
import secrets

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from academy.app.core.constants import Role
from academy.app.core.exceptions import AcademyError
from academy.app.core.security import generate_random_credential
from academy.app.core.settings import get_settings
from academy.app.models.parent_link import ParentStudentLink
from academy.app.models.student import Student
from academy.app.models.user import User

logger = logging.getLogger(__name__)

PARENT_NAME_SUFFIX = "학부모"


def student_account_email(student: Student) -> str:
    # Student numbers can be reissued after a deletion
    return f"student_{student.student_number}_{secrets.token_hex(4)}@{get_settings().account_email_domain}"


def parent_account_email(phone: str) -> str:
    return f"parent_{phone}@{get_settings().account_email_domain}"


def parent_display_name(student: Student) -> str:
    return f"{student.name} {PARENT_NAME_SUFFIX}"


def find_parent_account(db: Session, phone: str) -> User | None:
    return db.query(User).filter(User.phone == phone, User.role == Role.PARENT).first()


def find_parent_link(db: Session, parent_user: User, student: Student) -> ParentStudentLink | None:
    return (
        db.query(ParentStudentLink)
        .filter(
            ParentStudentLink.parent_user_id == parent_user.id,
            ParentStudentLink.student_id == student.id,
        )
        .first()
    )


def get_or_create_student_account(db: Session, student: Student, phone: str) -> User:
    """Return the STUDENT account bound to ``student``, creating and binding one if needed.

    The binding is claimed with a conditional update on ``students.user_id``;
    a request that loses the claim discards its own account and returns the
    one already bound to the student.
    """
    if student.user is not None:
        return student.user

    account = User(
        email=student_account_email(student),
        hashed_password=generate_random_credential(),
        name=student.name,
        role=Role.STUDENT,
        phone=phone,
        is_active=True,
    )
    db.add(account)
    try:
        db.flush()
        claimed = (
            db.query(Student)
            .filter(Student.id == student.id, Student.user_id.is_(None))
            .update({Student.user_id: account.id}, synchronize_session=False)
        )
    except IntegrityError:
        claimed = 0

    if not claimed:
        db.rollback()
        db.refresh(student)
        if student.user is None:
            raise AcademyError("Could not provision a student account", code="PROVISIONING_FAILED")
        logger.warning("Student account for student %s created concurrently; reusing it", student.id)
        return student.user

    db.commit()
    db.refresh(student)
    db.refresh(account)
    logger.info("Provisioned student account %s for student %s", account.id, student.id)
    return account


def get_or_create_parent_account(db: Session, phone: str, display_name: str) -> User:
    """Return the PARENT account registered under ``phone``, creating it on first use."""
    account = find_parent_account(db, phone)
    if account is not None:
        return account

    account = User(
        email=parent_account_email(phone),
        hashed_password=generate_random_credential(),
        name=display_name,
        role=Role.PARENT,
        phone=phone,
        is_active=True,
    )
    db.add(account)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Parent account for phone %s created concurrently; reusing it", phone)
        account = find_parent_account(db, phone)
        if account is None:
            raise
        return account

    db.refresh(account)
    logger.info("Provisioned parent account %s", account.id)
    return account


def ensure_parent_link(db: Session, parent_user: User, student: Student) -> ParentStudentLink:
    """Link ``parent_user`` to ``student`` unless the pair is already linked."""
    link = find_parent_link(db, parent_user, student)
    if link is not None:
        return link

    link = ParentStudentLink(parent_user_id=parent_user.id, student_id=student.id)
    db.add(link)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(
            "Link between parent %s and student %s created concurrently; reusing it", parent_user.id, student.id
        )
        link = find_parent_link(db, parent_user, student)
        if link is None:
            raise
        return link

    db.refresh(link)
    logger.info("Linked parent %s to student %s", parent_user.id, student.id)
    return link
