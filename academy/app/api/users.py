"""Admin endpoints for staff accounts."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from academy.app.core.constants import Role
from academy.app.db.session import get_db
from academy.app.dependencies.auth import SessionContext, get_admin_context, get_staff_context
from academy.app.models.user import User
from academy.app.schemas.user import StaffCreate, StaffRead, StaffUpdate
from academy.app.services.auth_service import create_staff_account

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=list[StaffRead])
def list_staff(
    role: Optional[str] = None,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    query = db.query(User).filter(User.role.in_(Role.STAFF_ROLES))
    if role:
        query = query.filter(User.role == role)
    return query.order_by(User.name.asc()).all()


@router.post("/", response_model=StaffRead, status_code=status.HTTP_201_CREATED)
def create_staff(
    staff_in: StaffCreate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_admin_context),
):
    existing = db.query(User).filter(User.email == staff_in.email).first()
    if existing:
        raise HTTPException(status_code=400, detail="Email already registered")
    return create_staff_account(db, staff_in)


@router.patch("/{user_id}", response_model=StaffRead)
def update_staff(
    user_id: int,
    payload: StaffUpdate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_admin_context),
):
    user = db.query(User).filter(User.id == user_id, User.role.in_(Role.STAFF_ROLES)).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if user.id == ctx.user_id and payload.is_active is False:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot deactivate yourself")
    for field, value in payload.model_dump(exclude_unset=True).items():
        if field in ("name", "is_active") and value is None:
            continue
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return user
