# infra/db/base.py
from __future__ import annotations
import logging
import os
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from infra.path import default_db_path

logger = logging.getLogger(__name__)

Base = declarative_base()


def default_db_url() -> str:
    env_override = (os.getenv("PM_EVM_DB_URL") or "").strip()
    if env_override:
        return env_override
    # Build DB URL using the absolute path in the per-user data dir
    db_path: Path = default_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{db_path.as_posix()}"


def make_engine(db_url: str | None = None) -> Engine:
    url = db_url or default_db_url()
    logger.info("Using database at: %s", url)
    return create_engine(url, echo=False, future=True)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def init_db(engine: Engine) -> None:
    """Create every EVM table that does not exist yet."""
    import infra.db.models  # noqa: F401  registers the tables on Base.metadata

    Base.metadata.create_all(engine)
