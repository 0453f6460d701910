"""Application configuration for the NACOS back-office."""

from __future__ import annotations

import os
from typing import Dict, Type

from dotenv import load_dotenv
from sqlalchemy.engine.url import make_url

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


def _engine_options_from_uri(uri: str) -> dict:
    url = make_url(uri)
    if url.get_backend_name() == "sqlite":
        return {"pool_pre_ping": True, "connect_args": {"timeout": 30}}
    if url.get_backend_name() in {"postgresql", "postgres", "mysql"}:
        timeout = int(os.environ.get("DB_CONNECT_TIMEOUT_SECONDS", "10"))
        return {"pool_pre_ping": True, "connect_args": {"connect_timeout": timeout}}
    return {"pool_pre_ping": True}


class BaseConfig:
    """Base configuration loaded for all environments."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "change-me")
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///instance/nacos.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options_from_uri(SQLALCHEMY_DATABASE_URI)

    # Server-side sessions: the cookie only carries the opaque session id.
    SESSION_BACKEND = os.environ.get("SESSION_BACKEND", "database")
    SESSION_COOKIE_NAME = "NACOS_SESSION"
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Strict"
    SESSION_COOKIE_SECURE = _flag("SESSION_COOKIE_SECURE", "false")
    SESSION_IDLE_TIMEOUT_SECONDS = int(os.environ.get("SESSION_IDLE_TIMEOUT_SECONDS", "1800"))
    SESSION_TTL_SECONDS = int(os.environ.get("SESSION_TTL_SECONDS", "86400"))
    SESSION_REGENERATE_SECONDS = int(os.environ.get("SESSION_REGENERATE_SECONDS", "1800"))
    # Ended session rows are deleted after this long
    SESSION_RETENTION_SECONDS = int(os.environ.get("SESSION_RETENTION_SECONDS", "604800"))
    SESSION_BIND_REMOTE_ADDR = _flag("SESSION_BIND_REMOTE_ADDR", "true")
    WTF_CSRF_ENABLED = True

    RATELIMIT_DEFAULT = "200/hour"
    RATELIMIT_STORAGE_URI = os.environ.get("REDIS_URL", "memory://")
    RATELIMIT_ENABLED = _flag("RATELIMIT_ENABLED", "true")
    LOGIN_RATE_LIMIT = os.environ.get("LOGIN_RATE_LIMIT", "10/minute")

    MAX_CONTENT_LENGTH = int(os.environ.get("MAX_CONTENT_LENGTH", str(25 * 1024 * 1024)))
    UPLOAD_FOLDER = os.environ.get("UPLOAD_FOLDER", "instance/uploads")
    RESOURCE_ALLOWED_EXTENSIONS = set(
        (
            os.environ.get("RESOURCE_ALLOWED_EXTENSIONS")
            or "pdf,doc,docx,ppt,pptx,zip,rar,txt,py,java,c,cpp,html,css,js,php"
        ).split(",")
    )
    RESOURCE_MAX_BYTES = int(os.environ.get("RESOURCE_MAX_BYTES", str(20 * 1024 * 1024)))
    DOCUMENT_ALLOWED_EXTENSIONS = set(
        (os.environ.get("DOCUMENT_ALLOWED_EXTENSIONS") or "pdf,doc,docx,xls,xlsx,ppt,pptx,txt").split(",")
    )
    DOCUMENT_MAX_BYTES = int(os.environ.get("DOCUMENT_MAX_BYTES", str(10 * 1024 * 1024)))
    LOGO_ALLOWED_EXTENSIONS = set(
        (os.environ.get("LOGO_ALLOWED_EXTENSIONS") or "jpg,jpeg,png,gif,svg").split(",")
    )
    LOGO_MAX_BYTES = int(os.environ.get("LOGO_MAX_BYTES", str(5 * 1024 * 1024)))

    ITEMS_PER_PAGE = int(os.environ.get("ITEMS_PER_PAGE", "20"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    ENV = "development"


class TestingConfig(BaseConfig):
    TESTING = True
    BCRYPT_LOG_ROUNDS = 4
    SQLALCHEMY_DATABASE_URI = os.environ.get("TEST_DATABASE_URL", "sqlite://")
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options_from_uri(SQLALCHEMY_DATABASE_URI)
    SESSION_BACKEND = "memory"
    RATELIMIT_ENABLED = False
    UPLOAD_FOLDER = os.environ.get("TEST_UPLOAD_FOLDER", "instance/test-uploads")
    LOG_LEVEL = "DEBUG"


class ProductionConfig(BaseConfig):
    ENV = "production"
    SESSION_COOKIE_SECURE = True


config_by_name: Dict[str, Type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    # CI pipelines set APP_ENV=ci; map to testing defaults.
    "ci": TestingConfig,
}
