import logging
import os

from sqlalchemy.orm import Session

from academy.app.core.constants import Role
from academy.app.core.security import get_password_hash
from academy.app.core.settings import get_settings
from academy.app.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_DEV_PASSWORD = "Secret123!"
DEFAULT_DEV_ADMIN_EMAIL = "admin@academy.test"


def ensure_default_dev_admin(db: Session) -> None:
    """
    Create a default ADMIN account for local development if none exists.
    Skips execution under pytest and outside the development environment.
    """
    if os.getenv("PYTEST_CURRENT_TEST"):
        return
    if get_settings().environment != "development":
        return

    if db.query(User).filter(User.role == Role.ADMIN).first():
        return

    db.add(
        User(
            email=DEFAULT_DEV_ADMIN_EMAIL,
            hashed_password=get_password_hash(DEFAULT_DEV_PASSWORD),
            name="Administrator",
            role=Role.ADMIN,
            is_active=True,
        )
    )
    db.commit()
    logger.info("Created default development admin %s", DEFAULT_DEV_ADMIN_EMAIL)
