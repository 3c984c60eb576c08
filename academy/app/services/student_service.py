"""Student record helpers."""

from sqlalchemy.orm import Session

from academy.app.core.time import utc_now
from academy.app.models.student import Student
from academy.app.services.phone_login_service import normalize_phone


def next_student_number(db: Session) -> str:
    """``<year><sequence>``, continuing from the highest sequence issued this year.

    Sequences are zero-padded to three digits and simply grow past 999.
    Manually entered numbers with a non-numeric suffix are ignored.
    """
    year = str(utc_now().year)
    issued = db.query(Student.student_number).filter(Student.student_number.startswith(year)).all()
    sequences = [int(number[len(year):]) for (number,) in issued if number[len(year):].isdigit()]
    return f"{year}{max(sequences, default=0) + 1:03d}"


def clean_phone(phone: str | None) -> str | None:
    if phone is None:
        return None
    normalized = normalize_phone(phone)
    return normalized or None
