from __future__ import annotations

import io
import os
from datetime import date

import pytest

from nacos.domains.documents.models import Document
from nacos.extensions import db
from nacos.tests.helpers import flash_text

pytestmark = pytest.mark.integration


def _document_form(**overrides) -> dict:
    data = {
        "title": "AGM Minutes - November 2025",
        "description": "Minutes of the annual general meeting",
        "doc_type": "meeting_minutes",
        "visibility": "members",
        "document_date": "2025-11-03",
        "academic_session": "2025/2026",
        "tags": "AGM, 2025",
    }
    data.update(overrides)
    return data


def _upload(name: str, content: bytes = b"%PDF-1.4 minutes") -> tuple:
    return (io.BytesIO(content), name)


def _stored_path(app, document: Document) -> str:
    return os.path.join(app.config["UPLOAD_FOLDER"], document.file_path)


def _create(admin_client, csrf, name: str = "minutes.pdf", **overrides) -> Document:
    resp = admin_client.post(
        "/admin/documents/new",
        data={**_document_form(**overrides), "document_file": _upload(name), "csrf_token": csrf()},
        content_type="multipart/form-data",
    )
    assert resp.status_code == 302
    return Document.query.order_by(Document.id.desc()).first()


class TestDocumentPages:
    def test_upload_document(self, app, admin_client, admin, csrf):
        document = _create(admin_client, csrf, name="AGM minutes.pdf")
        assert document.file_name == "AGM_minutes.pdf"
        assert document.file_size == len(b"%PDF-1.4 minutes")
        assert document.document_date == date(2025, 11, 3)
        assert document.academic_session == "2025/2026"
        assert document.uploaded_by == admin.id
        assert document.file_path.startswith("documents/")
        assert os.path.exists(_stored_path(app, document))
        assert "Document uploaded successfully!" in flash_text(admin_client)

    def test_file_is_required(self, admin_client, csrf):
        resp = admin_client.post("/admin/documents/new", data={**_document_form(), "csrf_token": csrf()})
        assert resp.status_code == 200
        assert "Please select a file to upload." in resp.get_data(as_text=True)
        assert Document.query.count() == 0

    def test_disallowed_extension(self, admin_client, csrf):
        resp = admin_client.post(
            "/admin/documents/new",
            data={**_document_form(), "document_file": _upload("script.py"), "csrf_token": csrf()},
            content_type="multipart/form-data",
        )
        assert "Invalid file type." in resp.get_data(as_text=True)
        assert Document.query.count() == 0

    def test_oversized_file(self, app, admin_client, csrf):
        app.config["DOCUMENT_MAX_BYTES"] = 8
        resp = admin_client.post(
            "/admin/documents/new",
            data={**_document_form(), "document_file": _upload("big.pdf", b"x" * 64), "csrf_token": csrf()},
            content_type="multipart/form-data",
        )
        assert "File size exceeds" in resp.get_data(as_text=True)
        assert Document.query.count() == 0

    @pytest.mark.parametrize(
        "overrides",
        [{"doc_type": "memo"}, {"visibility": "everyone"}, {"academic_session": "2025-26"}],
    )
    def test_invalid_fields_rejected(self, admin_client, csrf, overrides):
        resp = admin_client.post(
            "/admin/documents/new",
            data={**_document_form(**overrides), "document_file": _upload("a.pdf"), "csrf_token": csrf()},
            content_type="multipart/form-data",
        )
        assert resp.status_code == 200
        assert Document.query.count() == 0

    def test_view_and_download_counts(self, admin_client, csrf):
        document = _create(admin_client, csrf)
        body = admin_client.get(f"/admin/documents/{document.id}").get_data(as_text=True)
        assert "AGM Minutes - November 2025" in body

        resp = admin_client.get(f"/admin/documents/{document.id}/download")
        assert resp.status_code == 200
        assert resp.data == b"%PDF-1.4 minutes"
        assert "attachment" in resp.headers["Content-Disposition"]
        resp.close()
        db.session.expire_all()
        assert db.session.get(Document, document.id).download_count == 1

    def test_download_of_missing_file(self, app, admin_client, csrf):
        document = _create(admin_client, csrf)
        os.remove(_stored_path(app, document))
        resp = admin_client.get(f"/admin/documents/{document.id}/download")
        assert resp.status_code == 302
        assert resp.headers["Location"].endswith(f"/admin/documents/{document.id}")
        assert "File not found on server." in flash_text(admin_client)

    def test_missing_document_redirects_home(self, admin_client):
        resp = admin_client.get("/admin/documents/999")
        assert resp.status_code == 302
        assert resp.headers["Location"].endswith("/admin/documents/")
        assert "Document not found." in flash_text(admin_client)

    def test_replace_file_removes_old_upload(self, app, admin_client, csrf):
        document = _create(admin_client, csrf, name="v1.pdf")
        old_path = _stored_path(app, document)

        assert admin_client.get(f"/admin/documents/{document.id}/edit").status_code == 200
        resp = admin_client.post(
            f"/admin/documents/{document.id}/edit",
            data={**_document_form(title="Minutes v2"), "document_file": _upload("v2.pdf"), "csrf_token": csrf()},
            content_type="multipart/form-data",
        )
        assert resp.status_code == 302
        document = db.session.get(Document, document.id)
        assert document.title == "Minutes v2"
        assert document.file_name == "v2.pdf"
        assert not os.path.exists(old_path)
        assert os.path.exists(_stored_path(app, document))

    def test_edit_without_new_file_keeps_upload(self, app, admin_client, csrf):
        document = _create(admin_client, csrf)
        path = _stored_path(app, document)
        resp = admin_client.post(
            f"/admin/documents/{document.id}/edit",
            data={**_document_form(visibility="public"), "csrf_token": csrf()},
        )
        assert resp.status_code == 302
        document = db.session.get(Document, document.id)
        assert document.visibility == "public"
        assert os.path.exists(path)

    def test_archive_hides_from_default_list(self, admin_client, csrf):
        kept = _create(admin_client, csrf, title="Amended Constitution 2024", doc_type="constitution")
        archived = _create(admin_client, csrf, title="Old Budget", doc_type="financial_report")
        resp = admin_client.post(f"/admin/documents/{archived.id}/archive", data={"csrf_token": csrf()})
        assert resp.status_code == 302
        assert db.session.get(Document, archived.id).is_archived is True

        body = admin_client.get("/admin/documents/").get_data(as_text=True)
        assert kept.title in body and archived.title not in body
        body = admin_client.get("/admin/documents/?archived=archived").get_data(as_text=True)
        assert archived.title in body and kept.title not in body

        admin_client.post(
            f"/admin/documents/{archived.id}/archive", data={"archived": "0", "csrf_token": csrf()}
        )
        assert db.session.get(Document, archived.id).is_archived is False

    def test_list_filters_and_search(self, admin_client, csrf):
        _create(admin_client, csrf, title="Handover Notes", doc_type="handover", visibility="admin")
        _create(admin_client, csrf, title="Sponsorship Proposal", doc_type="proposal", visibility="public", tags="sponsor")
        body = admin_client.get("/admin/documents/?type=handover").get_data(as_text=True)
        assert "Handover Notes" in body and "Sponsorship Proposal" not in body
        body = admin_client.get("/admin/documents/?visibility=public").get_data(as_text=True)
        assert "Sponsorship Proposal" in body and "Handover Notes" not in body
        body = admin_client.get("/admin/documents/?search=sponsor").get_data(as_text=True)
        assert "Sponsorship Proposal" in body and "Handover Notes" not in body

    def test_delete_removes_file(self, app, admin_client, csrf):
        document = _create(admin_client, csrf)
        path = _stored_path(app, document)
        admin_client.post(f"/admin/documents/{document.id}/delete", data={"csrf_token": csrf()})
        assert Document.query.count() == 0
        assert not os.path.exists(path)
        assert "Document deleted successfully!" in flash_text(admin_client)

    def test_anonymous_visitor_is_sent_to_login(self, client):
        resp = client.get("/admin/documents/")
        assert resp.status_code == 302
        assert resp.headers["Location"].endswith("/admin/login")
