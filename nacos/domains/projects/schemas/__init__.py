from nacos.domains.projects.schemas.project_schemas import ProjectForm, ProjectListFilter

__all__ = ["ProjectForm", "ProjectListFilter"]
