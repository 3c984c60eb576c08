"""Email/password authentication and session issuance."""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from academy.app.core.exceptions import UnauthorizedError
from academy.app.core.security import create_access_token, get_password_hash, verify_password
from academy.app.core.time import utc_now
from academy.app.models.user import User
from academy.app.schemas.user import StaffCreate

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass
class IssuedSession:
    token: str
    account: User


def issue_session(account: User) -> IssuedSession:
    token = create_access_token(user_id=account.id, role=account.role, name=account.name)
    return IssuedSession(token=token, account=account)


def authenticate(db: Session, email: str, password: str) -> IssuedSession:
    user = db.query(User).filter(User.email == email).first()
    if not user or not user.hashed_password:
        logger.info("Login failed for %s: unknown account", email)
        raise UnauthorizedError(INVALID_CREDENTIALS)
    if not user.is_active:
        raise UnauthorizedError("User is inactive")
    if not verify_password(password, user.hashed_password):
        logger.info("Login failed for account %s: wrong password", user.id)
        raise UnauthorizedError(INVALID_CREDENTIALS)

    user.last_login = utc_now()
    db.commit()
    db.refresh(user)
    logger.info("Login succeeded for account %s", user.id)
    return issue_session(user)


def create_staff_account(db: Session, staff_in: StaffCreate) -> User:
    user = User(
        email=staff_in.email,
        hashed_password=get_password_hash(staff_in.password),
        name=staff_in.name,
        role=staff_in.role,
        phone=staff_in.phone,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
