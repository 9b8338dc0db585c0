"""Engine, session factory and declarative base for the coupon store."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.core.config import settings


def _engine_options(dsn: str) -> dict[str, Any]:
    if make_url(dsn).get_backend_name() == "sqlite":
        # FastAPI serves sync endpoints from a thread pool
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(
    settings.APP_DATABASE_DSN,
    echo=settings.DEBUG,
    **_engine_options(settings.APP_DATABASE_DSN),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Yield a session per request and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create the coupons table if it does not exist yet."""
    # Register mapped classes on Base.metadata before create_all
    import app.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
