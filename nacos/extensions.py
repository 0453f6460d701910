"""Extension singletons shared by the factory, models and CLI."""

from pathlib import Path

from flask_bcrypt import Bcrypt
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

# Stable constraint names keep SQLite batch migrations reproducible.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

db = SQLAlchemy(
    metadata=MetaData(naming_convention=NAMING_CONVENTION),
    session_options={"expire_on_commit": False},
)
migrate = Migrate()
bcrypt = Bcrypt()
# RATELIMIT_ENABLED, RATELIMIT_DEFAULT and RATELIMIT_STORAGE_URI come from app config
limiter = Limiter(key_func=get_remote_address)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"


def init_extensions(app) -> None:
    db.init_app(app)
    migrate.init_app(app, db, directory=str(MIGRATIONS_DIR), render_as_batch=True)
    bcrypt.init_app(app)
    limiter.init_app(app)
