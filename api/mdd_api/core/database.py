from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from mdd_api.core.config import settings
import logging

logger = logging.getLogger(__name__)

IN_MEMORY_SQLITE_URLS = ("sqlite://", "sqlite:///:memory:")


def build_engine(db_url: str) -> Engine:
    """Create the engine for a database URL.

    Hosted Postgres providers hand out postgres:// URLs; SQLAlchemy only
    accepts postgresql://. SQLite engines get a single shared connection
    when in memory, since every new connection would see an empty database.
    """
    if db_url.startswith("postgres://"):
        db_url = db_url.replace("postgres://", "postgresql://", 1)

    if db_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if db_url in IN_MEMORY_SQLITE_URLS:
            kwargs["poolclass"] = StaticPool
        return create_engine(db_url, echo=False, **kwargs)

    return create_engine(
        db_url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=5,
        max_overflow=10,
    )


logger.info(f"Connecting to database: {settings.database_url[:20]}...")  # Log partial URL for debugging

engine = build_engine(settings.database_url)


def get_session():
    """Dependency for getting database sessions."""
    with Session(engine) as session:
        yield session


def init_db(bind: Engine = engine):
    """Initialize database tables."""
    # Models must be imported so their tables are registered on the metadata
    from mdd_api import models  # noqa: F401

    SQLModel.metadata.create_all(bind)
