from nacos.domains.projects.services.project_service import (
    active_project_count,
    assignable_members,
    create_project,
    delete_project,
    get_project,
    list_projects,
    project_members,
    update_project,
)

__all__ = [
    "active_project_count",
    "assignable_members",
    "create_project",
    "delete_project",
    "get_project",
    "list_projects",
    "project_members",
    "update_project",
]
