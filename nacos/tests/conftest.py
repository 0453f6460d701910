import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nacos import create_app
from nacos.core.auth.constants import Role
from nacos.extensions import db
from nacos.tests.helpers import csrf_from, login, make_member


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database, pages)")
    config.addinivalue_line("markers", "slow: Slow running tests")
    config.addinivalue_line("markers", "smoke: Quick smoke tests for CI")


@pytest.fixture()
def app(tmp_path):
    """Per-test app on a fresh in-memory database with uploads under tmp_path."""
    app = create_app("testing")
    app.config["UPLOAD_FOLDER"] = str(tmp_path / "uploads")
    ctx = app.app_context()
    ctx.push()
    db.create_all()
    try:
        yield app
    finally:
        db.session.remove()
        db.drop_all()
        ctx.pop()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def store(app):
    return app.session_interface.store


@pytest.fixture()
def admin(app):
    return make_member("admin", Role.ADMIN, full_name="Ada Admin", matric_no="CSC/2020/001")


@pytest.fixture()
def executive(app):
    return make_member("exec", Role.EXECUTIVE, full_name="Eve Executive", matric_no="CSC/2020/002")


@pytest.fixture()
def admin_client(client, admin):
    resp = login(client, "admin")
    assert resp.status_code == 302
    return client


@pytest.fixture()
def executive_client(client, executive):
    resp = login(client, "exec")
    assert resp.status_code == 302
    return client


@pytest.fixture()
def csrf(client):
    """Fetch a fresh token from a page rendered for the current session."""

    def _token(path: str = "/admin/") -> str:
        return csrf_from(client.get(path))

    return _token
