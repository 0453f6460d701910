from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from nacos.domains.projects.models import Project, ProjectMember
from nacos.domains.projects.schemas import ProjectForm
from nacos.extensions import db
from nacos.tests.helpers import flash_text, login, make_member

pytestmark = pytest.mark.integration


def _project_form(**overrides) -> dict:
    data = {
        "title": "Campus Navigator",
        "description": "Indoor maps for the faculty",
        "project_status": "in-progress",
        "start_date": "2024-02-01",
        "completion_date": "",
        "repository_link": "https://github.com/nacos/navigator",
        "technologies": "Python, Flask\nLeaflet",
        "key_features": "Search rooms\n\nOffline maps",
    }
    data.update(overrides)
    return data


class TestProjectForm:
    def test_normalizes_lists_and_status(self):
        form = ProjectForm.model_validate({**_project_form(), "members": ["3", "3", "4"]})
        assert form.project_status == "in_progress"
        assert form.technologies == ["Python", "Flask", "Leaflet"]
        assert form.key_features == ["Search rooms", "Offline maps"]
        assert form.members == [3, 4]
        assert form.completion_date is None

    def test_completion_before_start_rejected(self):
        with pytest.raises(ValidationError):
            ProjectForm.model_validate(_project_form(completion_date="2024-01-01"))

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            ProjectForm.model_validate(_project_form(project_status="someday"))


class TestProjectPages:
    def test_create_project_with_members(self, admin_client, csrf):
        alice = make_member("alice", full_name="Alice A", matric_no="CSC/2022/001")
        bob = make_member("bob", full_name="Bob B", matric_no="CSC/2022/002")
        data = {**_project_form(), "members": [str(alice.id), str(bob.id)], "csrf_token": csrf()}

        resp = admin_client.post("/admin/projects/new", data=data)
        assert resp.status_code == 302

        project = Project.query.filter_by(title="Campus Navigator").one()
        assert project.project_status == "in_progress"
        assert project.technologies == ["Python", "Flask", "Leaflet"]
        assert sorted(project.member_ids) == sorted([alice.id, bob.id])
        assert "Project created successfully!" in flash_text(admin_client)

    def test_unknown_member_leaves_nothing_behind(self, admin_client, csrf):
        data = {**_project_form(), "members": ["9999"], "csrf_token": csrf()}
        resp = admin_client.post("/admin/projects/new", data=data)
        assert resp.status_code == 200
        assert "One or more selected members do not exist." in resp.get_data(as_text=True)
        assert Project.query.count() == 0

    def test_invalid_dates_rerender(self, admin_client, csrf):
        resp = admin_client.post(
            "/admin/projects/new",
            data={**_project_form(completion_date="2023-01-01"), "csrf_token": csrf()},
        )
        assert resp.status_code == 200
        assert "Completion date cannot be before start date." in resp.get_data(as_text=True)

    def test_edit_syncs_members(self, admin_client, csrf):
        alice = make_member("alice", full_name="Alice A", matric_no="CSC/2022/001")
        bob = make_member("bob", full_name="Bob B", matric_no="CSC/2022/002")
        project = Project(title="Old", description="Old", start_date=date(2024, 1, 1))
        project.memberships.append(ProjectMember(member_id=alice.id))
        db.session.add(project)
        db.session.commit()

        assert admin_client.get(f"/admin/projects/{project.id}/edit").status_code == 200
        resp = admin_client.post(
            f"/admin/projects/{project.id}/edit",
            data={**_project_form(title="Renamed", project_status="completed"), "members": [str(bob.id)], "csrf_token": csrf()},
        )
        assert resp.status_code == 302
        refreshed = db.session.get(Project, project.id)
        assert refreshed.title == "Renamed"
        assert refreshed.member_ids == [bob.id]

    def test_list_filter_and_view(self, admin_client):
        db.session.add_all(
            [
                Project(title="Alpha", description="A", project_status="completed", start_date=date(2023, 1, 1)),
                Project(title="Beta", description="B", project_status="ideation", start_date=date(2024, 1, 1)),
            ]
        )
        db.session.commit()
        body = admin_client.get("/admin/projects/?status=completed").get_data(as_text=True)
        assert "Alpha" in body and "Beta" not in body

        beta = Project.query.filter_by(title="Beta").one()
        assert "Beta" in admin_client.get(f"/admin/projects/{beta.id}").get_data(as_text=True)

    def test_missing_project(self, admin_client):
        resp = admin_client.get("/admin/projects/123")
        assert resp.status_code == 302
        assert "Project not found." in flash_text(admin_client)

    def test_delete_project(self, admin_client, csrf):
        project = Project(title="Doomed", description="x", start_date=date(2024, 1, 1))
        db.session.add(project)
        db.session.commit()
        admin_client.post(f"/admin/projects/{project.id}/delete", data={"csrf_token": csrf()})
        assert db.session.get(Project, project.id) is None

    def test_regular_member_cannot_manage_projects(self, client):
        make_member("regular")
        login(client, "regular")
        resp = client.get("/admin/projects/")
        assert resp.status_code == 302
        assert resp.headers["Location"].endswith("/admin/login")
