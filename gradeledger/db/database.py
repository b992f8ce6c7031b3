# /gradeledger/db/database.py

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ..core.config import DATABASE_URL


def create_db_engine(url: str = DATABASE_URL) -> Engine:
    """
    Builds an engine for the remote store.

    SQLite needs `check_same_thread` disabled because FastAPI runs sync routes
    in a thread pool, and an in-memory database must share one connection or
    every session would see an empty schema.
    """
    engine_args = {}
    if url.startswith("sqlite"):
        engine_args["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            engine_args["poolclass"] = StaticPool
    engine = create_engine(url, **engine_args)

    if url.startswith("sqlite"):
        # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on.
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = create_db_engine()

# Each instance of SessionLocal is one database session.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

