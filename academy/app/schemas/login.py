"""Login request and response schemas."""

from typing import Literal, Optional

from pydantic import BaseModel, EmailStr

from academy.app.schemas.user import AccountRead

LoginRole = Literal["STUDENT", "PARENT"]


class LoginRequest(BaseModel):
    """Payload for email/password login attempts."""

    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: AccountRead


class PhoneLookupRequest(BaseModel):
    phone: Optional[str] = None


class StudentCandidate(BaseModel):
    id: int
    name: str
    school: Optional[str] = None
    grade: Optional[str] = None
    login_as: LoginRole


class PhoneLookupResponse(BaseModel):
    step: Literal["SELECT_STUDENT"] = "SELECT_STUDENT"
    students: list[StudentCandidate]
    message: str = "Select a student and enter the student's name."


class PhoneConfirmRequest(BaseModel):
    phone: Optional[str] = None
    student_id: Optional[int] = None
    student_name: Optional[str] = None
    login_as: Optional[LoginRole] = None


class PhoneLoginResponse(TokenResponse):
    step: Literal["LOGIN_SUCCESS"] = "LOGIN_SUCCESS"
