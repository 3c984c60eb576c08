import json
import logging

from academy.app.core.exceptions import (
    AcademyError,
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NameMismatchError,
    NotFoundError,
    UnauthorizedError,
)
from academy.app.core.logging_config import JSONFormatter


def test_status_codes():
    assert InvalidInputError().status_code == 400
    assert ConflictError().status_code == 400
    assert UnauthorizedError().status_code == 401
    assert NameMismatchError().status_code == 401
    assert ForbiddenError().status_code == 403
    assert NotFoundError().status_code == 404
    assert AcademyError("boom").status_code == 500


def test_to_dict_shape():
    assert InvalidInputError("Phone number is required").to_dict() == {
        "detail": "Phone number is required",
        "code": "INVALID_INPUT",
    }
    assert NotFoundError("Student not found", resource="student").to_dict() == {
        "detail": "Student not found",
        "code": "NOT_FOUND",
        "details": {"resource": "student"},
    }


def test_name_mismatch_is_unauthorized():
    error = NameMismatchError()
    assert isinstance(error, UnauthorizedError)
    assert error.code == "NAME_MISMATCH"


def test_json_formatter_emits_one_object():
    record = logging.LogRecord(
        name="academy.app.services.phone_login_service",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Phone login succeeded for account %s",
        args=(7,),
        exc_info=None,
    )
    payload = json.loads(JSONFormatter().format(record))
    assert payload["level"] == "INFO"
    assert payload["message"] == "Phone login succeeded for account 7"
    assert payload["logger"] == "academy.app.services.phone_login_service"
