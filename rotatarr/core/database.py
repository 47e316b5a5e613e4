"""Database setup for Rotatarr using SQLModel."""

from sqlmodel import SQLModel, Session, create_engine

from rotatarr.core.config import get_settings

settings = get_settings()

connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args["check_same_thread"] = False  # Needed for SQLite

engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    connect_args=connect_args,
)


def create_db_and_tables():
    """Create all database tables."""
    # Register table models on the metadata before creating
    import rotatarr.models.library  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session():
    """Dependency that provides a database session."""
    with Session(engine) as session:
        yield session
