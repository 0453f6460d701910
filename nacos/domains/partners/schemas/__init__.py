from nacos.domains.partners.schemas.partner_schemas import (
    REQUEST_FIELD_ERRORS,
    PartnerForm,
    PartnerListFilter,
    PartnerRequestForm,
)

__all__ = ["REQUEST_FIELD_ERRORS", "PartnerForm", "PartnerListFilter", "PartnerRequestForm"]
