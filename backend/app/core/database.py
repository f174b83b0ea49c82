from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from backend.app.core.config import settings


def _engine_options(database_url: str) -> dict[str, object]:
    """Driver-specific engine options.

    FastAPI runs sync handlers in a threadpool, so SQLite connections must be
    usable from threads other than the one that opened them.
    """
    if make_url(database_url).get_backend_name() == "sqlite":
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(settings.DATABASE_URL, echo=False, **_engine_options(settings.DATABASE_URL))

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


class Base(DeclarativeBase):
    pass


def get_db() -> Generator[Session, None, None]:
    """Yield a request-scoped session; the reporting endpoints only read."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
