"""Generate database sessions"""

from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.schema import Base


def build_session_factory(database_url: str, echo: bool = False) -> sessionmaker[Session]:
    """Create the engine, make sure all tables exist, and return a session factory bound to it."""
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        # An in-memory database only lives as long as its single connection
        extra = {"poolclass": StaticPool} if ":memory:" in database_url else {}
        engine = create_engine(
            database_url, echo=echo, connect_args=connect_args, **extra
        )
    else:
        engine = create_engine(database_url, echo=echo)

    # Ensure all tables are created
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False)
