from nacos.domains.resources.schemas.resource_schemas import ResourceForm, ResourceListFilter

__all__ = ["ResourceForm", "ResourceListFilter"]
