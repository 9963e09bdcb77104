from pathlib import Path
import logging

from alembic import command
from alembic.config import Config

logger = logging.getLogger(__name__)


def migration_dir() -> Path:
    """The ``migration/`` directory at the project root (infra -> project root)."""
    script_location = Path(__file__).resolve().parents[1] / "migration"
    if not (script_location / "env.py").exists():
        raise RuntimeError(f"Alembic script_location missing: {script_location}")
    return script_location


def run_migrations(db_url: str) -> None:
    """Bring the EVM schema of ``db_url`` to the latest revision."""
    script_location = migration_dir()
    alembic_ini = script_location / "alembic.ini"
    if not alembic_ini.exists():
        raise RuntimeError(f"Alembic config missing: {alembic_ini}")

    cfg = Config(str(alembic_ini))
    cfg.set_main_option("script_location", str(script_location))
    cfg.set_main_option("sqlalchemy.url", db_url)

    logger.info("Upgrading database schema at %s", db_url)
    command.upgrade(cfg, "head")
