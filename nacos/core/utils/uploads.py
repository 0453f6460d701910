"""Local file upload validation and storage."""

from __future__ import annotations

import logging
import os
import secrets
import time
from typing import Iterable, Optional

from flask import current_app
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

logger = logging.getLogger(__name__)


def file_extension(filename: str) -> str:
    return filename.rsplit(".", 1)[1].lower() if "." in filename else ""


def allowed_file(filename: str, allowed: Iterable[str]) -> bool:
    return file_extension(filename) in {ext.lower() for ext in allowed}


def upload_size(file: FileStorage) -> int:
    stream = file.stream
    position = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size


def unique_name(filename: str) -> str:
    ext = file_extension(filename)
    stem = f"{int(time.time())}_{secrets.token_hex(6)}"
    return f"{stem}.{ext}" if ext else stem


def store_upload(
    file: Optional[FileStorage],
    *,
    subdir: str,
    allowed: Iterable[str],
    max_bytes: int,
) -> Optional[str]:
    """Validate and save an upload. Returns the stored path relative to UPLOAD_FOLDER.

    Returns None when no file was submitted. Raises ValueError
    ``invalid_file_type`` or ``file_too_large``.
    """
    if file is None or not file.filename:
        return None
    original = secure_filename(file.filename)
    if not original or not allowed_file(original, allowed):
        raise ValueError("invalid_file_type")
    if max_bytes and upload_size(file) > max_bytes:
        raise ValueError("file_too_large")

    upload_root = current_app.config.get("UPLOAD_FOLDER") or "instance/uploads"
    target_dir = os.path.join(upload_root, subdir)
    os.makedirs(target_dir, exist_ok=True)
    stored = unique_name(original)
    file.save(os.path.join(target_dir, stored))
    logger.info("Stored upload %s as %s/%s", original, subdir, stored)
    return f"{subdir}/{stored}"


def upload_path(relative_path: str) -> str:
    """Absolute filesystem path of a stored upload."""
    upload_root = current_app.config.get("UPLOAD_FOLDER") or "instance/uploads"
    return os.path.abspath(os.path.join(upload_root, relative_path))


def remove_upload(relative_path: Optional[str]) -> None:
    if not relative_path:
        return
    path = upload_path(relative_path)
    try:
        os.remove(path)
    except FileNotFoundError:
        logger.warning("Upload %s already gone", relative_path)


__all__ = ["allowed_file", "store_upload", "remove_upload", "upload_path", "unique_name", "file_extension", "upload_size"]
