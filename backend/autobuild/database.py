"""
Database engine and sessions for the scheduling store.

DATABASE_URL (from the environment or a .env file) selects the backing
database; SQLite is the default. SQL_ECHO=true logs every statement.
"""

import os
from pathlib import Path
from typing import Any, Generator

from dotenv import load_dotenv
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

load_dotenv()

DEFAULT_DATABASE_URL = "sqlite:///./autobuild.db"
DATABASE_URL = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").lower() in ("true", "1", "yes")


def make_engine(url: str, **engine_kwargs: Any) -> Engine:
    """Engine for `url`; SQLite gets a shared-thread connection and a parent directory for its file."""
    if url.startswith("sqlite"):
        engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
        if ":memory:" not in url:
            Path(url.replace("sqlite:///", "", 1)).parent.mkdir(parents=True, exist_ok=True)
    engine_kwargs.setdefault("echo", _env_flag("SQL_ECHO"))
    return create_engine(url, **engine_kwargs)


engine: Engine = make_engine(DATABASE_URL)


def get_session() -> Generator[Session, None, None]:
    """Request-scoped session; services commit or roll back themselves."""
    with Session(engine) as session:
        yield session


def init_db(bind: Engine = engine) -> None:
    """Create the job, schedule and timeslot tables that do not exist yet."""
    import autobuild.models  # noqa: F401

    SQLModel.metadata.create_all(bind)
