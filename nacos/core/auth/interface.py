"""Flask session interface exchanging the server-side session id via cookie."""

from __future__ import annotations

from flask import Flask, Request, Response, current_app
from flask.sessions import SessionInterface

from nacos.core.auth.session_store import ServerSession, SessionStore


class ServerSideSessionInterface(SessionInterface):
    """Loads ``ServerSession`` objects from a ``SessionStore`` keyed by cookie."""

    session_class = ServerSession

    def __init__(self, store: SessionStore) -> None:
        self.store = store

    def open_session(self, app: Flask, request: Request) -> ServerSession:
        sid = request.cookies.get(self.get_cookie_name(app))
        session = self.store.load(sid) if sid else None
        if session is None:
            session = self.store.create()
        return session

    def save_session(self, app: Flask, session: ServerSession, response: Response) -> None:
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)
        secure = self.get_cookie_secure(app)
        samesite = self.get_cookie_samesite(app)
        httponly = self.get_cookie_httponly(app)

        if session.destroyed or (not session and not session.new):
            if not session.new:
                self.store.destroy(session.sid)
            if session.regenerated_from:
                self.store.destroy(session.regenerated_from)
            if not session:
                response.delete_cookie(
                    name, domain=domain, path=path, secure=secure, samesite=samesite, httponly=httponly
                )
                response.vary.add("Cookie")
                return
            # Data written after destroy() (the logout flash) moves to a brand-new id.
            session.restart()

        # Anonymous visitors with nothing to remember do not get a session.
        if not session:
            return

        session.touch()
        self.store.save(session)
        if session.new or session.regenerated_from or session.modified:
            response.set_cookie(
                name,
                session.sid,
                expires=self.get_expiration_time(app, session),
                httponly=httponly,
                domain=domain,
                path=path,
                secure=secure,
                samesite=samesite,
            )
        response.vary.add("Cookie")


def get_session_store() -> SessionStore:
    """Return the store attached to the running app."""
    return current_app.session_interface.store  # type: ignore[attr-defined]


__all__ = ["ServerSideSessionInterface", "get_session_store"]
