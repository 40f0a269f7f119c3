from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from salesboard.core.config import settings

Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    """Create an engine; in-memory SQLite shares one connection across sessions."""
    connect_args = {}
    kwargs = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(
        database_url, echo=False, future=True, connect_args=connect_args, **kwargs
    )


def init_db(bind: Engine) -> None:
    """Create any missing tables (no migrations for the SQLite workflow)."""
    from salesboard import models  # noqa: F401  # register tables on Base.metadata

    Base.metadata.create_all(bind=bind)


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def get_db():
    """Provide a SQLAlchemy session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
