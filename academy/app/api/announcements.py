from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from academy.app.db.session import get_db
from academy.app.dependencies.auth import SessionContext, get_staff_context
from academy.app.models.announcement import Announcement
from academy.app.schemas.announcement import AnnouncementCreate, AnnouncementRead, AnnouncementUpdate

router = APIRouter(prefix="/announcements", tags=["announcements"])


def _get_announcement(db: Session, announcement_id: int) -> Announcement:
    announcement = db.query(Announcement).filter(Announcement.id == announcement_id).first()
    if not announcement:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Announcement not found")
    return announcement


@router.get("/", response_model=list[AnnouncementRead])
def list_announcements(db: Session = Depends(get_db), ctx: SessionContext = Depends(get_staff_context)):
    return db.query(Announcement).order_by(Announcement.publish_date.desc(), Announcement.id.desc()).all()


@router.post("/", response_model=AnnouncementRead, status_code=status.HTTP_201_CREATED)
def create_announcement(
    payload: AnnouncementCreate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    announcement = Announcement(**payload.model_dump(), is_active=True)
    db.add(announcement)
    db.commit()
    db.refresh(announcement)
    return announcement


@router.get("/{announcement_id}", response_model=AnnouncementRead)
def get_announcement(announcement_id: int, db: Session = Depends(get_db), ctx: SessionContext = Depends(get_staff_context)):
    return _get_announcement(db, announcement_id)


@router.put("/{announcement_id}", response_model=AnnouncementRead)
def update_announcement(
    announcement_id: int,
    payload: AnnouncementUpdate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_staff_context),
):
    announcement = _get_announcement(db, announcement_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if field == "expiry_date" or value is not None:
            setattr(announcement, field, value)
    db.commit()
    db.refresh(announcement)
    return announcement


@router.delete("/{announcement_id}")
def delete_announcement(announcement_id: int, db: Session = Depends(get_db), ctx: SessionContext = Depends(get_staff_context)):
    announcement = _get_announcement(db, announcement_id)
    db.delete(announcement)
    db.commit()
    return {"status": "deleted", "id": announcement_id}
