from nacos.domains.documents.schemas.document_schemas import DocumentForm, DocumentListFilter

__all__ = ["DocumentForm", "DocumentListFilter"]
