"""Alembic environment for the NACOS back-office.

The database URL comes from ``sqlalchemy.url`` when the caller sets one (tests,
ad-hoc upgrades), then from the running app (``flask db``), and finally from a
fresh app built for ``nacos_env``.
"""

from __future__ import annotations

import logging
import sys
from logging.config import fileConfig
from pathlib import Path

from alembic import context
from flask import current_app, has_app_context
from sqlalchemy import create_engine, pool

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from nacos import create_app  # noqa: E402
from nacos.extensions import db  # noqa: E402

config = context.config
logger = logging.getLogger("alembic.env")

if config.config_file_name and Path(config.config_file_name).exists():
    fileConfig(config.config_file_name)


def database_url() -> str:
    url = config.get_main_option("sqlalchemy.url")
    if not url and has_app_context():
        # `flask db ...` runs inside the app it migrates
        url = current_app.config["SQLALCHEMY_DATABASE_URI"]
    if not url:
        app = create_app(config.get_main_option("nacos_env", "development"))
        url = app.config["SQLALCHEMY_DATABASE_URI"]
    return url


def migration_options(dialect_name: str) -> dict:
    return {
        "target_metadata": db.metadata,
        "compare_type": True,
        # SQLite cannot ALTER constraints in place
        "render_as_batch": dialect_name == "sqlite",
    }


def run_offline(url: str) -> None:
    dialect_name = url.split(":", 1)[0].split("+", 1)[0]
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **migration_options(dialect_name),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online(url: str) -> None:
    engine = create_engine(url, poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            logger.info("Migrating %s database", connection.dialect.name)
            context.configure(connection=connection, **migration_options(connection.dialect.name))
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_offline(database_url())
else:
    run_online(database_url())
