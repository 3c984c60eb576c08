from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from academy.app.db.session import get_db
from academy.app.dependencies.auth import SessionContext, get_staff_context
from academy.app.models.classroom import Subject
from academy.app.schemas.classroom import SubjectCreate, SubjectRead

router = APIRouter(prefix="/subjects", tags=["subjects"])


@router.get("/", response_model=list[SubjectRead])
def list_subjects(db: Session = Depends(get_db), ctx: SessionContext = Depends(get_staff_context)):
    return db.query(Subject).order_by(Subject.name.asc()).all()


@router.post("/", response_model=SubjectRead, status_code=status.HTTP_201_CREATED)
def create_subject(
    subject_in: SubjectCreate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    if db.query(Subject).filter(Subject.name == subject_in.name).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Subject already exists")
    subject = Subject(name=subject_in.name, description=subject_in.description)
    db.add(subject)
    db.commit()
    db.refresh(subject)
    return subject
