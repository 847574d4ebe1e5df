# app/database.py
"""
Database connection, session management, and table creation.
Uses SQLAlchemy with PostgreSQL (SQLite works for local runs and tests).
All models are auto-imported here so create_tables() creates every table in one call.
"""

from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import settings
from app.exceptions import Conflict, Transient


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # One shared connection so an in-memory database survives across sessions
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {
        "pool_pre_ping": True,   # Auto-reconnect if DB connection drops
        "pool_size": 10,
        "max_overflow": 20,
    }


engine = create_engine(settings.DATABASE_URL, echo=False, **_engine_options(settings.DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """FastAPI dependency — yields a DB session and closes it after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db: Session, action: str):
    """
    Unit of work: everything written inside the block is committed together
    or rolled back together. Driver errors are translated into Conflict / Transient.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Conflict(action, "conflicting record already exists") from e
    except OperationalError as e:
        db.rollback()
        raise Transient(action, "database unavailable, please try again") from e
    except Exception:
        db.rollback()
        raise


def create_tables():
    """
    Creates all DB tables on startup. Safe to call multiple times.
    Import all models here so SQLAlchemy knows about them.
    """
    from app.models.profile import Profile                              # noqa
    from app.models.vehicle import Vehicle                              # noqa
    from app.models.vehicle_status_history import VehicleStatusHistory  # noqa
    from app.models.work_order import WorkOrder                         # noqa
    from app.models.work_order_settings import WorkOrderSettings        # noqa

    Base.metadata.create_all(bind=engine)
