"""Authentication dependencies resolving the caller's identity.

Browser clients present the session token in the ``auth-token`` cookie, the
mobile app in an ``Authorization: Bearer`` header. Either way the resolved
identity is handed to handlers as a :class:`SessionContext`.
"""

from dataclasses import dataclass

from fastapi import Cookie, Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from academy.app.core.constants import Role
from academy.app.core.security import decode_access_token
from academy.app.db.session import get_db
from academy.app.models.parent_link import ParentStudentLink
from academy.app.models.user import User


@dataclass(frozen=True)
class SessionContext:
    """Authenticated identity threaded through request handlers."""

    user: User
    role: str

    @property
    def user_id(self) -> int:
        return self.user.id

    @property
    def is_staff(self) -> bool:
        return self.role in Role.STAFF_ROLES


def _extract_token(authorization: str | None, auth_token: str | None) -> str | None:
    # An explicit header wins over a cookie left behind by another login
    if authorization and authorization.startswith("Bearer "):
        return authorization.split(" ", 1)[1]
    return auth_token or None


def get_session_context(
    db: Session = Depends(get_db),
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None, alias="auth-token"),
) -> SessionContext:
    token = _extract_token(authorization, auth_token)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        payload = decode_access_token(token)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    try:
        user_id_int = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    user = db.query(User).filter(User.id == user_id_int).first()
    if not user or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return SessionContext(user=user, role=user.role)


def get_current_user(ctx: SessionContext = Depends(get_session_context)) -> User:
    return ctx.user


def get_staff_context(ctx: SessionContext = Depends(get_session_context)) -> SessionContext:
    if not ctx.is_staff:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Staff access required")
    return ctx


def get_admin_context(ctx: SessionContext = Depends(get_session_context)) -> SessionContext:
    if ctx.role != Role.ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return ctx


def ensure_student_access(db: Session, ctx: SessionContext, student_id: int) -> None:
    """Staff see every student; parents only linked children; students only themselves."""
    if ctx.is_staff:
        return
    if ctx.role == Role.PARENT:
        link = (
            db.query(ParentStudentLink)
            .filter(
                ParentStudentLink.parent_user_id == ctx.user_id,
                ParentStudentLink.student_id == student_id,
            )
            .first()
        )
        if link:
            return
    elif ctx.role == Role.STUDENT:
        profile = ctx.user.student_profile
        if profile is not None and profile.id == student_id:
            return
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="No access to this student")
