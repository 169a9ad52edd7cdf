"""
Database session management.
"""
from typing import Optional
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from quokkapack.core.config import settings
from quokkapack.db.base import Base


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine, allowing SQLite connections to cross request threads."""
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": 30}
        )
    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_recycle=3600
    )


engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Optional[Engine] = None):
    """Initialize database tables."""
    # Import all models so SQLAlchemy can register them
    import quokkapack.models  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)
