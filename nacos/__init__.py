"""NACOS back-office application factory and bootstrap."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from flask import Flask, redirect, request, url_for

from nacos.config import config_by_name
from nacos.core.auth.responses import Redirect, Render
from nacos.extensions import init_extensions


class NacosFlask(Flask):
    """Flask app that also accepts ``Render``/``Redirect`` handler outcomes."""

    def make_response(self, rv):
        if isinstance(rv, (Render, Redirect)):
            rv = rv.to_flask()
        return super().make_response(rv)


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the NACOS Flask application."""
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()
    project_root = Path(__file__).resolve().parent.parent
    instance_root = project_root / "instance"

    app = NacosFlask(
        __name__,
        instance_path=str(instance_root),
        instance_relative_config=True,
        template_folder=str(Path(__file__).parent / "templates"),
    )
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)

    # Ensure instance folders exist (uploads, sqlite file)
    instance_root.mkdir(parents=True, exist_ok=True)
    uploads_path = Path(app.config.get("UPLOAD_FOLDER", "instance/uploads"))
    if not uploads_path.is_absolute():
        uploads_path = project_root / uploads_path
    uploads_path.mkdir(parents=True, exist_ok=True)
    app.config["UPLOAD_FOLDER"] = str(uploads_path)

    # Normalize sqlite path to absolute to avoid "unable to open database file"
    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI") or ""
    if db_uri.startswith("sqlite:///") and not db_uri.startswith("sqlite:////"):
        abs_path = project_root / db_uri.replace("sqlite:///", "", 1)
        abs_path.parent.mkdir(parents=True, exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{abs_path}"

    _configure_logging(app)
    init_extensions(app)
    _import_models()
    _install_session_interface(app)
    _register_blueprints(app)
    _register_error_handlers(app)
    _register_template_helpers(app)

    @app.get("/")
    def index():
        return redirect(url_for("admin_pages.dashboard"))

    @app.get("/health")
    def health():
        return {"ok": True}, 200

    from nacos.scripts import register_commands

    register_commands(app)
    return app


def _configure_logging(app: Flask) -> None:
    level = app.config.get("LOG_LEVEL", "INFO")
    logging.getLogger("nacos").setLevel(level)
    app.logger.setLevel(level)


def _import_models() -> None:
    """Load every model module so metadata (and Alembic) sees all tables."""
    from nacos.core.auth import models as auth_models  # noqa: F401
    from nacos.core.members import models as member_models  # noqa: F401
    from nacos.domains.documents import models as document_models  # noqa: F401
    from nacos.domains.partners import models as partner_models  # noqa: F401
    from nacos.domains.projects import models as project_models  # noqa: F401
    from nacos.domains.resources import models as resource_models  # noqa: F401
    from nacos.platform.outbox import models as outbox_models  # noqa: F401


def _install_session_interface(app: Flask) -> None:
    from nacos.core.auth.interface import ServerSideSessionInterface
    from nacos.core.auth.session_store import build_session_store

    store = build_session_store(app.config.get("SESSION_BACKEND", "database"))
    app.session_interface = ServerSideSessionInterface(store)


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers."""
    from nacos.core.admin.controllers import admin_pages_bp
    from nacos.core.auth.controllers import auth_pages_bp  # local import to avoid circulars
    from nacos.domains.documents.controllers.document_pages import document_pages_bp
    from nacos.domains.members.controllers.member_pages import member_pages_bp
    from nacos.domains.partners.controllers.partner_pages import partner_pages_bp
    from nacos.domains.partners.controllers.public_pages import public_partner_bp
    from nacos.domains.projects.controllers.project_pages import project_pages_bp
    from nacos.domains.resources.controllers.resource_pages import resource_pages_bp

    app.register_blueprint(auth_pages_bp, url_prefix="/admin")
    app.register_blueprint(admin_pages_bp, url_prefix="/admin")
    app.register_blueprint(member_pages_bp, url_prefix="/admin/members")
    app.register_blueprint(project_pages_bp, url_prefix="/admin/projects")
    app.register_blueprint(resource_pages_bp, url_prefix="/admin/resources")
    app.register_blueprint(document_pages_bp, url_prefix="/admin/documents")
    app.register_blueprint(partner_pages_bp, url_prefix="/admin/partners")
    app.register_blueprint(public_partner_bp)


def _register_error_handlers(app: Flask) -> None:
    """Turn failures into flash + redirect or an error page."""
    from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

    from nacos.core.auth.constants import Severity
    from nacos.core.auth.context import PageContext
    from nacos.core.auth.errors import CSRFFailure, NacosError

    @app.errorhandler(NacosError)
    def _nacos_error(exc: NacosError):
        if isinstance(exc, CSRFFailure):
            return Render("errors/invalid_request.html", {"message": exc.message}, status=400)
        target = exc.target or url_for("auth_pages.login")
        return PageContext.current().redirect_with_message(target, exc.message, exc.severity)

    @app.errorhandler(RequestEntityTooLarge)
    def _too_large(exc: RequestEntityTooLarge):
        target = request.referrer or url_for("admin_pages.dashboard")
        return PageContext.current().redirect_with_message(
            target, "The uploaded file exceeds the size limit.", Severity.ERROR
        )

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return Render("errors/http_error.html", {"code": exc.code, "description": exc.description}, status=exc.code)

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        app.logger.exception("Unhandled error: %s", exc)
        from nacos.extensions import db

        db.session.rollback()
        return Render("errors/http_error.html", {"code": 500, "description": "An unexpected error occurred."}, status=500)


def _register_template_helpers(app: Flask) -> None:
    """csrf_token() and take_flash() for templates."""
    from nacos.core.auth.context import PageContext

    def csrf_token() -> str:
        return PageContext.current().csrf.issue_token()

    def take_flash():
        return PageContext.current().flash.take_flash()

    def current_identity():
        return PageContext.current().current_identity()

    @app.context_processor
    def inject_helpers():
        return {
            "csrf_token": csrf_token,
            "take_flash": take_flash,
            "current_identity": current_identity,
        }
