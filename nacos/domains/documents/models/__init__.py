from nacos.domains.documents.models.document_models import DOCUMENT_TYPES, VISIBILITY_LEVELS, Document

__all__ = ["DOCUMENT_TYPES", "VISIBILITY_LEVELS", "Document"]
