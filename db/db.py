import logging
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db.models.base import Base

logger = logging.getLogger(__name__)

# Bound by init_engine() at startup; tests override get_db instead
engine: Optional[Engine] = None
SessionLocal = sessionmaker(autoflush=False, expire_on_commit=False)


def build_engine(database_url: str, auth_token: Optional[str] = None) -> Engine:
    """
    Create an engine for the key store.

    A separate auth token is injected as the URL password unless the URL
    already carries one. Bound parameters are kept out of error messages
    since they include redemption codes.
    """
    url = make_url(database_url)
    if auth_token and not url.password:
        url = url.set(password=auth_token)

    backend = url.get_backend_name()
    if backend == "sqlite":
        if url.database in (None, "", ":memory:"):
            # One shared connection, otherwise every checkout sees an empty database
            return create_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                hide_parameters=True,
            )
        return create_engine(url, connect_args={"check_same_thread": False}, hide_parameters=True)

    connect_args = {}
    if backend == "postgresql":
        connect_args["options"] = "-c timezone=utc"

    return create_engine(
        url,
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,
        pool_pre_ping=True,
        connect_args=connect_args,
        hide_parameters=True,
    )


def init_engine(database_url: str, auth_token: Optional[str] = None) -> Engine:
    """Create the process-wide engine and bind the session factory to it."""
    global engine
    engine = build_engine(database_url, auth_token)
    SessionLocal.configure(bind=engine)
    logger.info("Key store engine initialized", extra={"backend": engine.url.get_backend_name()})
    return engine


def init_db(bind: Optional[Engine] = None) -> None:
    """Create the keys table if it does not exist yet."""
    target = bind or engine
    if target is None:
        raise RuntimeError("Database engine is not initialized")
    Base.metadata.create_all(bind=target)


def get_db():
    if engine is None:
        raise RuntimeError("Database engine is not initialized")

    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
