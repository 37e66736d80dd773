import os
from contextlib import contextmanager
from typing import Any, Dict, Tuple

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, URL, make_url
from sqlalchemy.orm import declarative_base, sessionmaker

_DATABASE_URL_ENV = "DATABASE_URL"


def _resolve_database_url(raw_url: str | None) -> Tuple[URL, Dict[str, Any]]:
    """Normalize the DATABASE_URL environment variable for SQLAlchemy.

    Plain postgres URLs are upgraded to the psycopg driver; SQLite is the
    default so the reference cache works without any setup.
    """
    if not raw_url:
        default_url = "sqlite:///./iev_sources.db"
        return make_url(default_url), {"check_same_thread": False}

    url = make_url(raw_url)

    if url.drivername.startswith("sqlite"):
        return url, {"check_same_thread": False}

    if url.drivername in {"postgres", "postgresql"}:
        url = url.set(drivername="postgresql+psycopg")

    return url, {}


def create_db_engine(raw_url: str | None = None) -> Engine:
    url, connect_args = _resolve_database_url(raw_url or os.getenv(_DATABASE_URL_ENV))
    return create_engine(url, future=True, pool_pre_ping=True, connect_args=connect_args)


engine = create_db_engine()
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False, future=True)
Base = declarative_base()


@contextmanager
def db_session(factory: sessionmaker = SessionLocal):
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
