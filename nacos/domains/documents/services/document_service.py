"""Document service layer.

Every document carries a stored file; replacing the file removes the old one
only after the row update commits.
"""

from __future__ import annotations

import logging
from typing import Optional

from flask import current_app
from sqlalchemy import or_
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from nacos.core.auth.session_models import Identity
from nacos.core.utils.pagination import paginate
from nacos.core.utils.uploads import remove_upload, store_upload, upload_size
from nacos.domains.documents.models.document_models import Document
from nacos.domains.documents.schemas.document_schemas import DocumentForm, DocumentListFilter
from nacos.extensions import db

logger = logging.getLogger(__name__)

UPLOAD_SUBDIR = "documents"


def list_documents(filters: DocumentListFilter) -> dict:
    query = Document.query
    if filters.search:
        term = f"%{filters.search.strip()}%"
        query = query.filter(
            or_(
                Document.title.ilike(term),
                Document.file_name.ilike(term),
                Document.description.ilike(term),
                Document.tags.ilike(term),
            )
        )
    if filters.type:
        query = query.filter(Document.doc_type == filters.type)
    if filters.visibility:
        query = query.filter(Document.visibility == filters.visibility)
    if filters.archived == "active":
        query = query.filter(Document.is_archived.is_(False))
    elif filters.archived == "archived":
        query = query.filter(Document.is_archived.is_(True))
    query = query.order_by(Document.upload_date.desc(), Document.id.desc())
    return paginate(query, page=filters.page, per_page=filters.per_page)


def get_document(document_id: int) -> Optional[Document]:
    return db.session.get(Document, document_id)


def _save_file(upload: Optional[FileStorage]) -> Optional[tuple[str, str, int]]:
    if upload is None or not upload.filename:
        return None
    size = upload_size(upload)
    stored = store_upload(
        upload,
        subdir=UPLOAD_SUBDIR,
        allowed=current_app.config["DOCUMENT_ALLOWED_EXTENSIONS"],
        max_bytes=current_app.config["DOCUMENT_MAX_BYTES"],
    )
    return stored, secure_filename(upload.filename), size


def _apply(document: Document, data: DocumentForm) -> None:
    document.title = data.title
    document.description = data.description
    document.doc_type = data.doc_type
    document.visibility = data.visibility
    document.document_date = data.document_date
    document.academic_session = data.academic_session
    document.tags = data.tags
    document.is_archived = data.is_archived


def create_document(data: DocumentForm, actor: Identity, upload: Optional[FileStorage]) -> Document:
    saved = _save_file(upload)
    if saved is None:
        raise ValueError("file_required")
    document = Document(uploaded_by=actor.id)
    _apply(document, data)
    document.file_path, document.file_name, document.file_size = saved
    db.session.add(document)
    db.session.commit()
    logger.info("Document %s uploaded by %s", document.id, actor.id)
    return document


def update_document(document_id: int, data: DocumentForm, upload: Optional[FileStorage] = None) -> Document:
    document = get_document(document_id)
    if document is None:
        raise ValueError("not_found")
    saved = _save_file(upload)
    previous_file = document.file_path
    _apply(document, data)
    if saved:
        document.file_path, document.file_name, document.file_size = saved
    db.session.commit()
    if saved and previous_file:
        remove_upload(previous_file)
    return document


def set_archived(document_id: int, archived: bool) -> Document:
    document = get_document(document_id)
    if document is None:
        raise ValueError("not_found")
    document.is_archived = archived
    db.session.commit()
    return document


def record_download(document: Document) -> None:
    Document.query.filter_by(id=document.id).update(
        {Document.download_count: Document.download_count + 1}, synchronize_session=False
    )
    db.session.commit()


def delete_document(document_id: int) -> bool:
    document = get_document(document_id)
    if document is None:
        return False
    file_path = document.file_path
    db.session.delete(document)
    db.session.commit()
    remove_upload(file_path)
    logger.info("Document %s deleted", document_id)
    return True
