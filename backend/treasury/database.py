"""
Database Engine & Session Management
SQLAlchemy setup for the SQL payment store. Nothing here is touched
unless STORAGE_BACKEND=sql, so the default in-memory deployment never
creates a database file.
"""
import os
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from treasury.config import get_settings

Base = declarative_base()


def make_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine, making sure the SQLite data directory exists."""
    connect_args = {}
    if database_url.startswith("sqlite:///"):
        db_path = database_url.replace("sqlite:///", "")
        if os.path.dirname(db_path):
            os.makedirs(os.path.dirname(db_path), exist_ok=True)
        connect_args["check_same_thread"] = False  # Required for SQLite
    return create_engine(database_url, connect_args=connect_args, echo=echo)


@lru_cache()
def get_engine() -> Engine:
    settings = get_settings()
    return make_engine(settings.DATABASE_URL, echo=settings.DEBUG)


@lru_cache()
def get_sessionmaker() -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def init_db(engine: Engine | None = None):
    """Create all tables. Called once at application startup for the SQL backend."""
    from treasury.models import payment as _payment_model   # noqa: F401

    Base.metadata.create_all(bind=engine or get_engine())
