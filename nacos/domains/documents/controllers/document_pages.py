"""Official document pages."""

from __future__ import annotations

import os

from flask import Blueprint, current_app, request, send_file, url_for
from pydantic import ValidationError

from nacos.core.auth.constants import Role, Severity
from nacos.core.auth.context import PageContext
from nacos.core.auth.errors import NotFound
from nacos.core.auth.responses import Render
from nacos.core.utils.decorators import csrf_protected, require_role
from nacos.core.utils.uploads import upload_path
from nacos.core.utils.validation import form_errors
from nacos.domains.documents.models import DOCUMENT_TYPES, VISIBILITY_LEVELS
from nacos.domains.documents.schemas import DocumentForm, DocumentListFilter
from nacos.domains.documents.services import (
    create_document,
    delete_document,
    get_document,
    list_documents,
    record_download,
    set_archived,
    update_document,
)

document_pages_bp = Blueprint("document_pages", __name__)

NOT_FOUND = "Document not found."
ERROR_MESSAGES = {
    "file_required": "Please select a file to upload.",
    "invalid_file_type": "Invalid file type. Allowed: PDF, DOC, DOCX, XLS, XLSX, PPT, PPTX, TXT",
    "not_found": NOT_FOUND,
}


def _error(code: str) -> str:
    if code == "file_too_large":
        limit = current_app.config["DOCUMENT_MAX_BYTES"] // (1024 * 1024)
        return f"File size exceeds {limit}MB limit."
    return ERROR_MESSAGES.get(code, "An error occurred. Please try again.")


def _home() -> str:
    return url_for("document_pages.documents_home")


def _load(document_id: int):
    document = get_document(document_id)
    if document is None:
        raise NotFound(NOT_FOUND, target=_home())
    return document


def _form_page(values, errors=None, document=None) -> Render:
    return Render(
        "documents/form.html",
        {
            "values": values,
            "errors": errors or [],
            "document": document,
            "types": DOCUMENT_TYPES,
            "visibilities": VISIBILITY_LEVELS,
        },
    )


@document_pages_bp.get("/")
@require_role(Role.EXECUTIVE)
def documents_home(ctx: PageContext):
    try:
        filters = DocumentListFilter.model_validate(request.args.to_dict())
    except ValidationError:
        filters = DocumentListFilter()
    return Render(
        "documents/list.html",
        {
            "page": list_documents(filters),
            "filters": filters,
            "types": DOCUMENT_TYPES,
            "visibilities": VISIBILITY_LEVELS,
        },
    )


@document_pages_bp.route("/new", methods=["GET", "POST"])
@require_role(Role.EXECUTIVE)
@csrf_protected
def add_document(ctx: PageContext):
    if request.method == "GET":
        return _form_page({})
    try:
        data = DocumentForm.model_validate(request.form.to_dict())
    except ValidationError as exc:
        return _form_page(request.form, form_errors(exc))
    try:
        create_document(data, ctx.identity, request.files.get("document_file"))
    except ValueError as exc:
        return _form_page(request.form, [_error(str(exc))])
    return ctx.redirect_with_message(_home(), "Document uploaded successfully!", Severity.SUCCESS)


@document_pages_bp.get("/<int:document_id>")
@require_role(Role.EXECUTIVE)
def view_document(ctx: PageContext, document_id: int):
    return Render("documents/view.html", {"document": _load(document_id)})


@document_pages_bp.get("/<int:document_id>/download")
@require_role(Role.EXECUTIVE)
def download_document(ctx: PageContext, document_id: int):
    document = _load(document_id)
    path = upload_path(document.file_path)
    if not os.path.exists(path):
        return ctx.redirect_with_message(
            url_for("document_pages.view_document", document_id=document_id),
            "File not found on server.",
            Severity.ERROR,
        )
    record_download(document)
    return send_file(path, as_attachment=True, download_name=document.file_name)


@document_pages_bp.route("/<int:document_id>/edit", methods=["GET", "POST"])
@require_role(Role.EXECUTIVE)
@csrf_protected
def edit_document(ctx: PageContext, document_id: int):
    document = _load(document_id)
    if request.method == "GET":
        values = {field: getattr(document, field) for field in DocumentForm.model_fields}
        return _form_page(values, document=document)
    try:
        data = DocumentForm.model_validate(request.form.to_dict())
    except ValidationError as exc:
        return _form_page(request.form, form_errors(exc), document)
    try:
        update_document(document_id, data, request.files.get("document_file"))
    except ValueError as exc:
        return _form_page(request.form, [_error(str(exc))], document)
    return ctx.redirect_with_message(
        url_for("document_pages.view_document", document_id=document_id),
        "Document updated successfully!",
        Severity.SUCCESS,
    )


@document_pages_bp.post("/<int:document_id>/archive")
@require_role(Role.EXECUTIVE)
@csrf_protected
def archive_document(ctx: PageContext, document_id: int):
    archived = request.form.get("archived", "1") != "0"
    try:
        set_archived(document_id, archived)
    except ValueError as exc:
        return ctx.redirect_with_message(_home(), _error(str(exc)), Severity.ERROR)
    message = "Document archived successfully!" if archived else "Document restored."
    return ctx.redirect_with_message(_home(), message, Severity.SUCCESS)


@document_pages_bp.post("/<int:document_id>/delete")
@require_role(Role.EXECUTIVE)
@csrf_protected
def remove_document(ctx: PageContext, document_id: int):
    if not delete_document(document_id):
        return ctx.redirect_with_message(_home(), NOT_FOUND, Severity.ERROR)
    return ctx.redirect_with_message(_home(), "Document deleted successfully!", Severity.SUCCESS)
