from nacos.domains.projects.models.project_models import (
    PROJECT_STATUSES,
    STATUS_ALIASES,
    Project,
    ProjectMember,
)

__all__ = ["PROJECT_STATUSES", "STATUS_ALIASES", "Project", "ProjectMember"]
