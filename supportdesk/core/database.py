import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from supportdesk.core.config import settings
from supportdesk.core.errors import RemoteOperationError

logger = logging.getLogger(__name__)

Base = declarative_base()


def make_engine(url: str):
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


engine = make_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def remote_operation(db: Session, action: str):
    """
    Wrap a block of table reads/writes so any database failure is rolled back,
    logged once and re-raised as RemoteOperationError.

    Usage:
        with remote_operation(db, "save ticket"):
            db.add(ticket)
            db.commit()
    """
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Database operation failed: %s", action)
        raise RemoteOperationError(f"Could not {action}") from exc
