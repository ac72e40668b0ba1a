"""Database engine and session factory.

The store is a SQLite database held by a single pooled connection. With the
default in-memory URL nothing survives a restart.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from wrench import config
from wrench.models.base import Base
# Import models to ensure they are registered with Base.metadata
import wrench.models  # noqa: F401


def create_session_factory(database_url: str = config.DATABASE_URL) -> sessionmaker:
    """Create an engine, ensure the schema and return a session factory.

    Args:
        database_url: SQLAlchemy URL of the store.

    Returns:
        A ``sessionmaker`` bound to the new engine.
    """
    engine = create_engine(
        database_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
    )
