"""Database configuration and connection setup"""
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from appointly.config.settings import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

# Create database engine with connection pooling
engine = create_engine(
    settings.DATABASE_URL,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_pre_ping=True,
    echo=False,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Database dependency for FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind=None):
    """
    Create all tables that do not exist yet.

    On PostgreSQL this also adds the appointments_no_overlap exclusion
    constraint (see models/appointment.py), matching the Alembic schema.
    """
    from appointly.models import Base

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables created")


if __name__ == "__main__":
    create_tables()
