from __future__ import annotations

import io
import os

import pytest

from nacos.domains.resources.models import Resource
from nacos.extensions import db
from nacos.tests.helpers import flash_text

pytestmark = pytest.mark.integration


def _resource_form(**overrides) -> dict:
    data = {
        "title": "Data Structures Notes",
        "description": "Week 1 to 6",
        "resource_type": "pdf",
        "level": "200",
        "course_code": "csc201",
        "tags": "trees, graphs",
        "external_link": "",
    }
    data.update(overrides)
    return data


def _upload(name: str, content: bytes = b"%PDF-1.4 fake") -> tuple:
    return (io.BytesIO(content), name)


def _stored_path(app, resource: Resource) -> str:
    return os.path.join(app.config["UPLOAD_FOLDER"], resource.file_path)


class TestResourcePages:
    def test_upload_resource(self, app, admin_client, admin, csrf):
        resp = admin_client.post(
            "/admin/resources/new",
            data={**_resource_form(), "resource_file": _upload("DS notes.pdf"), "csrf_token": csrf()},
            content_type="multipart/form-data",
        )
        assert resp.status_code == 302
        resource = Resource.query.one()
        assert resource.course_code == "CSC201"
        assert resource.file_name == "DS_notes.pdf"
        assert resource.file_size == len(b"%PDF-1.4 fake")
        assert resource.uploaded_by == admin.id
        assert resource.file_path.startswith("resources/")
        assert os.path.exists(_stored_path(app, resource))
        assert "Resource added successfully!" in flash_text(admin_client)

    def test_link_only_resource(self, admin_client, csrf):
        resp = admin_client.post(
            "/admin/resources/new",
            data={**_resource_form(resource_type="link", external_link="https://example.com/ds"), "csrf_token": csrf()},
        )
        assert resp.status_code == 302
        resource = Resource.query.one()
        assert resource.file_path is None
        assert resource.external_link == "https://example.com/ds"

    def test_disallowed_extension(self, admin_client, csrf):
        resp = admin_client.post(
            "/admin/resources/new",
            data={**_resource_form(), "resource_file": _upload("payload.exe"), "csrf_token": csrf()},
            content_type="multipart/form-data",
        )
        assert resp.status_code == 200
        assert "Invalid file type." in resp.get_data(as_text=True)
        assert Resource.query.count() == 0

    def test_oversized_file(self, app, admin_client, csrf):
        app.config["RESOURCE_MAX_BYTES"] = 8
        resp = admin_client.post(
            "/admin/resources/new",
            data={**_resource_form(), "resource_file": _upload("big.pdf", b"x" * 64), "csrf_token": csrf()},
            content_type="multipart/form-data",
        )
        assert "File size exceeds" in resp.get_data(as_text=True)
        assert Resource.query.count() == 0

    def test_invalid_level(self, admin_client, csrf):
        resp = admin_client.post(
            "/admin/resources/new", data={**_resource_form(level="900"), "csrf_token": csrf()}
        )
        assert resp.status_code == 200
        assert Resource.query.count() == 0

    def test_replace_file_removes_old_upload(self, app, admin_client, csrf):
        admin_client.post(
            "/admin/resources/new",
            data={**_resource_form(), "resource_file": _upload("v1.pdf"), "csrf_token": csrf()},
            content_type="multipart/form-data",
        )
        resource = Resource.query.one()
        old_path = _stored_path(app, resource)

        assert admin_client.get(f"/admin/resources/{resource.id}/edit").status_code == 200
        resp = admin_client.post(
            f"/admin/resources/{resource.id}/edit",
            data={**_resource_form(title="Notes v2"), "resource_file": _upload("v2.pdf"), "csrf_token": csrf()},
            content_type="multipart/form-data",
        )
        assert resp.status_code == 302
        resource = db.session.get(Resource, resource.id)
        assert resource.title == "Notes v2"
        assert resource.file_name == "v2.pdf"
        assert not os.path.exists(old_path)
        assert os.path.exists(_stored_path(app, resource))

    def test_delete_removes_file(self, app, admin_client, csrf):
        admin_client.post(
            "/admin/resources/new",
            data={**_resource_form(), "resource_file": _upload("gone.pdf"), "csrf_token": csrf()},
            content_type="multipart/form-data",
        )
        resource = Resource.query.one()
        path = _stored_path(app, resource)
        admin_client.post(f"/admin/resources/{resource.id}/delete", data={"csrf_token": csrf()})
        assert Resource.query.count() == 0
        assert not os.path.exists(path)

    def test_list_filters(self, admin_client):
        db.session.add_all(
            [
                Resource(title="Calculus Past Questions", resource_type="past_question", level="100"),
                Resource(title="Compiler Guide", resource_type="study_guide", level="400"),
            ]
        )
        db.session.commit()
        body = admin_client.get("/admin/resources/?level=400").get_data(as_text=True)
        assert "Compiler Guide" in body and "Calculus Past Questions" not in body
        body = admin_client.get("/admin/resources/?type=past_question").get_data(as_text=True)
        assert "Calculus Past Questions" in body and "Compiler Guide" not in body
