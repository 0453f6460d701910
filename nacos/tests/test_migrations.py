from __future__ import annotations

from pathlib import Path

import pytest
import sqlalchemy as sa
from alembic import command
from alembic.config import Config as AlembicConfig

pytestmark = [pytest.mark.integration, pytest.mark.slow]

MIGRATIONS = Path(__file__).resolve().parents[1] / "migrations"


def test_migrations_build_every_table(app, tmp_path):
    db_file = tmp_path / "migrated.db"
    url = f"sqlite:///{db_file}"
    cfg = AlembicConfig()
    cfg.set_main_option("script_location", str(MIGRATIONS))
    cfg.set_main_option("sqlalchemy.url", url)
    cfg.set_main_option("nacos_env", "testing")

    command.upgrade(cfg, "head")

    engine = sa.create_engine(url)
    try:
        tables = set(sa.inspect(engine).get_table_names())
    finally:
        engine.dispose()
    expected = {
        "member",
        "auth_session",
        "security_event",
        "platform_outbox",
        "project",
        "project_member",
        "resource",
        "partner",
        "partner_request",
        "document",
    }
    assert expected <= tables

    command.downgrade(cfg, "base")
