"""Migrations build the same tables the models declare."""

from argparse import Namespace
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from leadhub.core.database import Base

ALEMBIC_DIR = Path(__file__).resolve().parent.parent / "alembic"


def _config(db_path: Path) -> Config:
    cfg = Config(cmd_opts=Namespace(x=[f"db_url=sqlite+aiosqlite:///{db_path}"]))
    cfg.set_main_option("script_location", str(ALEMBIC_DIR))
    return cfg


def _columns(db_path: Path) -> dict[str, set[str]]:
    engine = create_engine(f"sqlite:///{db_path}")
    try:
        inspector = inspect(engine)
        return {
            table: {column["name"] for column in inspector.get_columns(table)}
            for table in inspector.get_table_names()
            if table != "alembic_version"
        }
    finally:
        engine.dispose()


def test_upgrade_matches_models(tmp_path):
    db_path = tmp_path / "leadhub.db"

    command.upgrade(_config(db_path), "head")

    expected = {
        name: {column.name for column in table.columns}
        for name, table in Base.metadata.tables.items()
    }
    assert _columns(db_path) == expected


def test_downgrade_removes_tables(tmp_path):
    db_path = tmp_path / "leadhub.db"
    cfg = _config(db_path)

    command.upgrade(cfg, "head")
    command.downgrade(cfg, "base")

    assert _columns(db_path) == {}
