# create_tables.py
import logging
import sys

from app.config.settings import settings
from app.database import Base, SessionLocal, engine
from app.models.task import Task
from app.models.user import User, UserRole
from app.utils.logger import configure_logging
from app.utils.security import hash_password

logger = logging.getLogger(__name__)


def create_tables(drop_existing: bool = False):
    """Create all tables, optionally dropping them first"""
    if drop_existing:
        Base.metadata.drop_all(bind=engine, tables=[Task.__table__, User.__table__])
        logger.info("Dropped existing tables")

    Base.metadata.create_all(bind=engine)
    logger.info("All tables created successfully")


def create_default_admin(db, name: str, email: str, password: str):
    """Create an admin account unless one with that email already exists"""
    existing = db.query(User).filter(User.email == email).first()
    if existing:
        logger.info(f"Admin user already exists: {email}")
        return existing

    admin = User(
        name=name,
        email=email,
        hashed_password=hash_password(password),
        role=UserRole.ADMIN,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info(f"Admin user created: {email}")
    return admin


def main(argv=None):
    configure_logging()
    argv = sys.argv[1:] if argv is None else argv

    create_tables(drop_existing="--drop" in argv)

    if settings.DEFAULT_ADMIN_EMAIL and settings.DEFAULT_ADMIN_PASSWORD:
        db = SessionLocal()
        try:
            create_default_admin(
                db,
                settings.DEFAULT_ADMIN_NAME,
                settings.DEFAULT_ADMIN_EMAIL,
                settings.DEFAULT_ADMIN_PASSWORD,
            )
        finally:
            db.close()
    else:
        logger.info("DEFAULT_ADMIN_EMAIL/DEFAULT_ADMIN_PASSWORD not set, skipping admin creation")


if __name__ == "__main__":
    main()
