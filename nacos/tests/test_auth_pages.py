from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from nacos.core.auth.constants import MEMBERSHIP_INACTIVE, Role, Severity
from nacos.core.auth.errors import AuthorizationFailure, NotFound
from nacos.core.auth.events import (
    AUTH_CSRF_REJECTED,
    AUTH_LOGIN_FAILED,
    AUTH_LOGIN_SUCCEEDED,
    AUTH_LOGOUT,
    AUTH_SESSION_ADDRESS_CHANGED,
)
from nacos.core.auth.models import SecurityEvent
from nacos.extensions import db
from nacos.tests.helpers import csrf_from, flash_text, login, make_member, session_id

pytestmark = pytest.mark.integration


def _events(name: str) -> list[SecurityEvent]:
    return SecurityEvent.query.filter_by(event=name).all()


class TestLogin:
    def test_login_page_renders_token(self, client):
        resp = client.get("/admin/login")
        assert resp.status_code == 200
        assert csrf_from(resp)
        assert session_id(client)

    def test_successful_login_redirects_to_dashboard(self, client, admin, store):
        anonymous_sid = None
        client.get("/admin/login")
        anonymous_sid = session_id(client)

        resp = login(client, "admin")
        assert resp.status_code == 302
        assert resp.headers["Location"].endswith("/admin/")

        new_sid = session_id(client)
        assert new_sid != anonymous_sid
        assert anonymous_sid not in store
        assert store.load(new_sid)["identity_id"] == admin.id

        page = client.get("/admin/")
        assert page.status_code == 200
        assert "Welcome back, Ada Admin!" in page.get_data(as_text=True)
        db.session.refresh(admin)
        assert admin.last_login is not None
        assert len(_events(AUTH_LOGIN_SUCCEEDED)) == 1

    def test_wrong_password_is_generic_and_audited(self, client, admin):
        resp = login(client, "admin", "not-the-password")
        body = resp.get_data(as_text=True)
        assert resp.status_code == 200
        assert "Invalid username or password, or account is inactive." in body
        assert "identity_id" not in client.application.session_interface.store.load(session_id(client))
        events = _events(AUTH_LOGIN_FAILED)
        assert len(events) == 1
        assert events[0].actor_name == "admin"

    def test_unknown_user_gets_the_same_message(self, client):
        resp = login(client, "ghost")
        assert "Invalid username or password, or account is inactive." in resp.get_data(as_text=True)

    def test_inactive_account_cannot_login(self, client):
        make_member("sleepy", Role.ADMIN, status=MEMBERSHIP_INACTIVE)
        resp = login(client, "sleepy")
        assert resp.status_code == 200
        assert "Invalid username or password, or account is inactive." in resp.get_data(as_text=True)

    def test_missing_credentials(self, client, csrf):
        token = csrf("/admin/login")
        resp = client.post("/admin/login", data={"username": "", "password": "", "csrf_token": token})
        assert "Please enter both username and password." in resp.get_data(as_text=True)

    def test_login_without_csrf_token_is_rejected(self, client, admin):
        client.get("/admin/login")
        resp = client.post("/admin/login", data={"username": "admin", "password": "correct-horse-1"})
        assert resp.status_code == 400
        assert "Invalid request. Please try again." in resp.get_data(as_text=True)
        assert len(_events(AUTH_CSRF_REJECTED)) == 1
        assert _events(AUTH_LOGIN_SUCCEEDED) == []

    def test_logged_in_admin_skips_login_page(self, admin_client):
        resp = admin_client.get("/admin/login")
        assert resp.status_code == 302
        assert resp.headers["Location"].endswith("/admin/")

    def test_regular_member_cannot_sign_in(self, client, store):
        make_member("regular", Role.MEMBER)
        resp = login(client, "regular")
        assert resp.status_code == 200
        assert "Invalid username or password, or account is inactive." in resp.get_data(as_text=True)
        assert "identity_id" not in store.load(session_id(client))
        assert _events(AUTH_LOGIN_SUCCEEDED) == []
        failed = _events(AUTH_LOGIN_FAILED)
        assert len(failed) == 1
        assert failed[0].actor_name == "regular"
        assert failed[0].details == {"reason": "not_admin_tier"}

        resp = client.get("/admin/")
        assert resp.status_code == 302
        assert resp.headers["Location"].endswith("/admin/login")
        assert "Please login to access admin dashboard." in flash_text(client)


class TestLogout:
    def test_logout_destroys_session_and_keeps_flash(self, admin_client, csrf, store):
        token = csrf()
        old_sid = session_id(admin_client)

        resp = admin_client.post("/admin/logout", data={"csrf_token": token})
        assert resp.status_code == 302
        assert resp.headers["Location"].endswith("/admin/login")

        new_sid = session_id(admin_client)
        assert new_sid and new_sid != old_sid
        assert old_sid not in store
        assert "identity_id" not in store.load(new_sid)

        body = admin_client.get("/admin/login").get_data(as_text=True)
        assert "You have been successfully logged out." in body
        assert len(_events(AUTH_LOGOUT)) == 1

    def test_dashboard_requires_login_after_logout(self, admin_client, csrf):
        admin_client.post("/admin/logout", data={"csrf_token": csrf()})
        resp = admin_client.get("/admin/")
        assert resp.status_code == 302
        assert resp.headers["Location"].endswith("/admin/login")

    def test_token_from_before_logout_is_stale(self, admin_client, csrf):
        token = csrf()
        admin_client.post("/admin/logout", data={"csrf_token": token})
        resp = admin_client.post("/admin/logout", data={"csrf_token": token})
        assert resp.status_code == 400


class TestGateOnPages:
    def test_anonymous_redirected_with_flash(self, client):
        resp = client.get("/admin/members/")
        assert resp.status_code == 302
        assert resp.headers["Location"].endswith("/admin/login")
        assert "Please login to access admin dashboard." in flash_text(client)

    def test_idle_session_expires(self, admin_client, store, app):
        sid = session_id(admin_client)
        store._records[sid].last_activity -= timedelta(seconds=app.config["SESSION_IDLE_TIMEOUT_SECONDS"] + 60)
        resp = admin_client.get("/admin/")
        assert resp.status_code == 302
        assert "Your session has expired. Please log in again." in flash_text(admin_client)

    def test_address_change_drops_identity(self, admin_client):
        resp = admin_client.get("/admin/", environ_overrides={"REMOTE_ADDR": "203.0.113.9"})
        assert resp.status_code == 302
        assert len(_events(AUTH_SESSION_ADDRESS_CHANGED)) == 1

    def test_executive_cannot_open_security_log(self, executive_client):
        resp = executive_client.get("/admin/security-events")
        assert resp.status_code == 302
        # Login page sends admin-tier users back to the dashboard, where the flash shows
        assert "Access denied. Admin privileges required." in flash_text(executive_client)

    def test_admin_sees_security_log(self, admin_client):
        resp = admin_client.get("/admin/security-events")
        assert resp.status_code == 200
        assert AUTH_LOGIN_SUCCEEDED in resp.get_data(as_text=True)

    def test_security_log_pages_newest_first(self, admin_client, app):
        app.config["ITEMS_PER_PAGE"] = 2
        for day in range(3):
            db.session.add(
                SecurityEvent(
                    event="test.marker",
                    outcome="success",
                    actor_name="seed",
                    subject=f"marker-{day}",
                    created_at=datetime(2024, 1, 1 + day),
                )
            )
        db.session.commit()

        first = admin_client.get("/admin/security-events").get_data(as_text=True)
        assert "Page 1 of 2" in first
        assert AUTH_LOGIN_SUCCEEDED in first
        assert "marker-2" in first
        assert "marker-1" not in first

        second = admin_client.get("/admin/security-events?page=2").get_data(as_text=True)
        assert "Page 2 of 2" in second
        assert "marker-1" in second
        assert "marker-0" in second
        assert "marker-2" not in second

    def test_health_is_public(self, client):
        assert client.get("/health").get_json() == {"ok": True}


class TestErrorHandler:
    def _raise_on(self, app, path: str, exc: Exception) -> None:
        def _view():
            raise exc

        app.add_url_rule(path, endpoint=path.strip("/").replace("/", "_"), view_func=_view)

    def test_not_found_redirects_to_its_target(self, app, client):
        self._raise_on(app, "/boom/missing", NotFound("That record is gone.", target="/admin/members/"))
        resp = client.get("/boom/missing")
        assert resp.status_code == 302
        assert resp.headers["Location"].endswith("/admin/members/")
        assert "That record is gone." in flash_text(client)

    def test_failure_without_target_returns_to_login(self, app, client):
        self._raise_on(app, "/boom/denied", AuthorizationFailure(severity=Severity.WARNING))
        resp = client.get("/boom/denied")
        assert resp.status_code == 302
        assert resp.headers["Location"].endswith("/admin/login")
        assert "Access denied. Admin privileges required." in flash_text(client)
