"""One-shot flash messages stored in the session."""

from __future__ import annotations

from typing import Optional

from nacos.core.auth.constants import SESSION_KEY_FLASH, Severity
from nacos.core.auth.responses import Redirect
from nacos.core.auth.session_models import FlashMessage
from nacos.core.auth.session_store import ServerSession


class FlashMessenger:
    def __init__(self, session: ServerSession) -> None:
        self.session = session

    def set_flash(self, message: str, severity: Severity = Severity.INFO) -> None:
        """Store the message, replacing any flash nobody has read yet."""
        self.session[SESSION_KEY_FLASH] = FlashMessage(message, Severity(severity)).to_session()

    def take_flash(self) -> Optional[FlashMessage]:
        """Read and clear the pending flash in a single pop."""
        return FlashMessage.from_session(self.session.pop(SESSION_KEY_FLASH, None))

    def redirect_with_message(
        self,
        target: str,
        message: str,
        severity: Severity = Severity.INFO,
    ) -> Redirect:
        """Set the flash and hand back the redirect the handler must return."""
        self.set_flash(message, severity)
        return Redirect(target)


__all__ = ["FlashMessenger"]
