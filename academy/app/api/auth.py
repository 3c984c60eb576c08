"""Login, logout and identity endpoints for staff and the mobile app."""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from academy.app.core.settings import get_settings
from academy.app.db.session import get_db
from academy.app.dependencies.auth import get_current_user
from academy.app.models.user import User
from academy.app.schemas.login import (
    LoginRequest,
    PhoneConfirmRequest,
    PhoneLoginResponse,
    PhoneLookupRequest,
    PhoneLookupResponse,
    TokenResponse,
)
from academy.app.schemas.user import AccountRead
from academy.app.services.auth_service import IssuedSession, authenticate
from academy.app.services.phone_login_service import confirm_phone_login, lookup_phone

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_auth_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        secure=settings.auth_cookie_secure,
        samesite="lax",
    )


def _token_body(session: IssuedSession) -> dict:
    return {
        "access_token": session.token,
        "token_type": "bearer",
        "user": AccountRead.model_validate(session.account),
    }


@router.post("/login", response_model=TokenResponse)
def login(credentials: LoginRequest, response: Response, db: Session = Depends(get_db)):
    session = authenticate(db, credentials.email, credentials.password)
    _set_auth_cookie(response, session.token)
    return _token_body(session)


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(get_settings().auth_cookie_name)
    return {"message": "Logged out"}


@router.get("/me", response_model=AccountRead)
def read_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.post("/phone-login/lookup", response_model=PhoneLookupResponse)
def phone_login_lookup(payload: PhoneLookupRequest, db: Session = Depends(get_db)):
    return PhoneLookupResponse(students=lookup_phone(db, payload.phone))


@router.post("/phone-login/confirm", response_model=PhoneLoginResponse)
def phone_login_confirm(payload: PhoneConfirmRequest, response: Response, db: Session = Depends(get_db)):
    session = confirm_phone_login(
        db,
        phone=payload.phone,
        student_id=payload.student_id,
        student_name=payload.student_name,
        login_as=payload.login_as,
    )
    _set_auth_cookie(response, session.token)
    return _token_body(session)
