from nacos.domains.resources.services.resource_service import (
    create_resource,
    delete_resource,
    get_resource,
    list_resources,
    update_resource,
)

__all__ = [
    "create_resource",
    "delete_resource",
    "get_resource",
    "list_resources",
    "update_resource",
]
