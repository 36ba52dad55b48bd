from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.config.settings import settings

DATABASE_URL = settings.DATABASE_URL


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live on a single connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return options
    if settings.DB_SSLMODE:
        # e.g. sslmode=require for PostgreSQL on Render
        return {"connect_args": {"sslmode": settings.DB_SSLMODE}}
    return {}


engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# ✅ This is required to be imported wherever DB session is needed
def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
