from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.pool import StaticPool
from studydeck.core.config import settings
import logging

logger = logging.getLogger(__name__)


def build_engine(db_url: str):
    """Create an engine for the given URL with pool settings suited to its backend."""
    # SQLAlchemy prefers postgresql:// over postgres://
    if db_url.startswith("postgres://"):
        db_url = db_url.replace("postgres://", "postgresql://", 1)

    if db_url.startswith("sqlite"):
        # One shared connection so in-memory databases survive across sessions
        return create_engine(
            db_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

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


def init_db():
    """Initialize database tables."""
    # Import models so their tables are registered on the metadata
    from studydeck import models  # noqa: F401
    SQLModel.metadata.create_all(engine)
