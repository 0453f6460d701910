"""WSGI entrypoint: ``gunicorn -c nacos/gunicorn.conf.py nacos.wsgi:app``."""

from __future__ import annotations

import os
import sys
from pathlib import Path

_PACKAGE_DIR = Path(__file__).resolve().parent
_PROJECT_DIR = str(_PACKAGE_DIR.parent)

# Running this file directly puts nacos/ on sys.path, where nacos/platform
# would shadow the stdlib ``platform`` module.
sys.path[:] = [entry for entry in sys.path if Path(entry or ".").resolve() != _PACKAGE_DIR]
if _PROJECT_DIR not in sys.path:
    sys.path.insert(0, _PROJECT_DIR)

from nacos import create_app  # noqa: E402

app = create_app(os.environ.get("APP_ENV"))


if __name__ == "__main__":
    app.run(
        host=os.environ.get("FLASK_RUN_HOST", "127.0.0.1"),
        port=int(os.environ.get("FLASK_RUN_PORT", "5000")),
    )
