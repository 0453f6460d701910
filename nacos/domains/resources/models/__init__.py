from nacos.domains.resources.models.resource_models import RESOURCE_TYPES, Resource

__all__ = ["RESOURCE_TYPES", "Resource"]
