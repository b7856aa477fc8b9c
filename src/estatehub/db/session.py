"""
Database Session Management

Provides database connection pooling and session management.
"""
from contextlib import contextmanager
from typing import Any, Dict, Generator

from sqlalchemy import create_engine, event, exc, pool, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from config.settings import settings
from src.estatehub.utils.logger import get_logger

logger = get_logger(__name__)


def build_engine(database_url: str = None, echo: bool = None) -> Engine:
    """
    Create an engine for the given URL.

    Pool sizing only applies to server databases; SQLite gets the
    dialect's default pool.
    """
    url = database_url or settings.database_url
    kwargs: Dict[str, Any] = {
        "echo": settings.database_echo if echo is None else echo,
    }
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs.update(
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_timeout=settings.database_pool_timeout,
            pool_recycle=settings.database_pool_recycle,
            pool_pre_ping=True,  # Verify connections before using
        )
    return create_engine(url, **kwargs)


engine = build_engine()


@event.listens_for(engine, "connect")
def receive_connect(dbapi_conn, connection_record):
    """Log connection establishment."""
    logger.debug("database_connection_established")


@event.listens_for(pool.Pool, "invalidate")
def receive_invalidate(dbapi_conn, connection_record, exception):
    """Log when a connection is marked as invalid and removed from pool."""
    logger.warning(
        "database_connection_invalidated",
        exception=str(exception) if exception else None
    )


# Create session factory
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False
)


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """
    Get database session with automatic cleanup.

    Usage:
        with get_db_session() as session:
            admin = AdminRepository().get_active_by_username(session, "ops")

    Yields:
        Database session

    Raises:
        Exception: Re-raises any exception after rollback
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except exc.SQLAlchemyError as e:
        session.rollback()
        logger.error(
            "database_session_rollback",
            error=str(e),
            error_type=type(e).__name__
        )
        raise
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def health_check(session: Session) -> bool:
    """
    Check database connection health.

    Returns:
        True if database is accessible, False otherwise
    """
    try:
        session.execute(text("SELECT 1"))
        return True
    except exc.SQLAlchemyError as e:
        logger.error(
            "database_health_check_failed",
            error=str(e),
            error_type=type(e).__name__
        )
        return False


def close_connections():
    """
    Close all database connections and dispose of the engine.

    Should be called on application shutdown.
    """
    logger.info("closing_database_connections")
    engine.dispose()


def create_all_tables(bind: Engine = None):
    """
    Create all database tables defined in models.

    WARNING: Use Alembic migrations instead in production.
    This is only for testing and initial setup.
    """
    from src.estatehub.db.base import Base, import_all_models

    import_all_models()
    Base.metadata.create_all(bind=bind or engine)
    logger.info("database_tables_created")


def drop_all_tables(bind: Engine = None):
    """
    Drop all database tables.

    WARNING: This will delete all data! Only use in development/testing.
    """
    from src.estatehub.db.base import Base, import_all_models

    logger.warning("dropping_all_database_tables")
    import_all_models()
    Base.metadata.drop_all(bind=bind or engine)
