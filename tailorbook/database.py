"""
Database connection module for the SQL key-value backend.
"""

import os
import logging
from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base
from tailorbook.config import settings

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def get_database_url() -> str:
    """
    Resolve the database URL from the environment, then settings.
    """
    url = os.environ.get("DATABASE_URL") or settings.DATABASE_URL

    # Remove accidental whitespace/quotes
    url = url.strip().strip("'").strip('"')

    # SQLALCHEMY COMPATIBILITY: Fix 'postgres://' to 'postgresql://'
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)

    return url


def create_db_engine(url: str = None):
    """Create SQLAlchemy engine. SQLite gets a thread-safe connection."""
    db_url = url or get_database_url()

    if db_url.startswith("sqlite"):
        logger.info(f"Configuring SQLite engine: {db_url}")
        return create_engine(db_url, connect_args={"check_same_thread": False})

    # Sanitized host logging
    host = db_url.split("@")[1].split(":")[0] if "@" in db_url else "unknown"
    logger.info(f"Configuring database engine for host: {host}")

    return create_engine(
        db_url,
        pool_pre_ping=True,
        pool_recycle=300,
        pool_size=5,
        max_overflow=10,
    )


# Singleton instance
_engine = None


def get_engine():
    """Lazy engine initialization to prevent import-time crashes."""
    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


# Base class for models
Base = declarative_base()


def init_db(engine=None):
    """Create the key-value table if it does not exist."""
    import tailorbook.models.kv_entry  # noqa: F401 - registers the table on Base

    Base.metadata.create_all(bind=engine or get_engine())


def check_database_health(engine=None) -> bool:
    try:
        with (engine or get_engine()).connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        return False
