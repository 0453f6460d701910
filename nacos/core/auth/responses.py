"""Terminal outcomes returned by page handlers.

Handlers return either ``Render`` or ``Redirect``; nothing runs after a handler
has produced one. The application converts them into Flask responses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Union

from flask import redirect, render_template


@dataclass(frozen=True)
class Render:
    template: str
    context: Dict[str, Any] = field(default_factory=dict)
    status: int = 200

    def to_flask(self):
        return render_template(self.template, **self.context), self.status


@dataclass(frozen=True)
class Redirect:
    target: str
    status: int = 302

    def to_flask(self):
        return redirect(self.target, code=self.status)


Outcome = Union[Render, Redirect]

__all__ = ["Render", "Redirect", "Outcome"]
