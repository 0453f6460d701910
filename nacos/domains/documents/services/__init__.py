from nacos.domains.documents.services.document_service import (
    create_document,
    delete_document,
    get_document,
    list_documents,
    record_download,
    set_archived,
    update_document,
)

__all__ = [
    "create_document",
    "delete_document",
    "get_document",
    "list_documents",
    "record_download",
    "set_archived",
    "update_document",
]
