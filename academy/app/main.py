# Academy admin backend entrypoint.

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from academy.app.api import announcements
from academy.app.api import assignments
from academy.app.api import attendance
from academy.app.api import auth
from academy.app.api import classes
from academy.app.api import counseling
from academy.app.api import dashboard
from academy.app.api import grades
from academy.app.api import mobile
from academy.app.api import payments
from academy.app.api import signup_requests
from academy.app.api import students
from academy.app.api import subjects
from academy.app.api import users
from academy.app.core.dev_seed import ensure_default_dev_admin
from academy.app.core.exceptions import AcademyError
from academy.app.core.logging_config import setup_logging
from academy.app.core.settings import get_settings
from academy.app.db.base import Base
from academy.app.db.session import SessionLocal, engine

settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version=settings.api_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["Content-Type", "Authorization", "X-Client-Type"],
)


@app.exception_handler(AcademyError)
async def academy_error_handler(request: Request, exc: AcademyError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


app.include_router(auth.router)
app.include_router(users.router)
app.include_router(students.router)
app.include_router(subjects.router)
app.include_router(classes.router)
app.include_router(attendance.router)
app.include_router(grades.router)
app.include_router(assignments.router)
app.include_router(counseling.router)
app.include_router(payments.router)
app.include_router(announcements.router)
app.include_router(signup_requests.router)
app.include_router(dashboard.router)
app.include_router(mobile.router)


@app.get("/")
def read_root():
    return {"app": settings.app_name, "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
def init_database():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ensure_default_dev_admin(db)
    finally:
        db.close()
