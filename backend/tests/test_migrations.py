import os

import sqlalchemy as sa
from alembic import command
from alembic.config import Config

BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def alembic_config(url: str) -> Config:
    cfg = Config(os.path.join(BACKEND_DIR, "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", url)
    cfg.attributes["configure_logger"] = False
    return cfg


def test_upgrade_creates_tables_and_downgrade_drops_them(tmp_path):
    url = f"sqlite+pysqlite:///{tmp_path / 'migrated.db'}"
    cfg = alembic_config(url)

    command.upgrade(cfg, "head")
    engine = sa.create_engine(url)
    inspector = sa.inspect(engine)
    tables = set(inspector.get_table_names())
    assert {"goals", "check_ins", "shares", "user_profiles"} <= tables
    uniques = inspector.get_unique_constraints("check_ins")
    assert any(set(u["column_names"]) == {"goal_id", "week_number", "year"} for u in uniques)

    command.downgrade(cfg, "base")
    assert not {"goals", "check_ins"} & set(sa.inspect(engine).get_table_names())
    engine.dispose()
