from nacos.domains.partners.models.partner_models import (
    PARTNER_STATUSES,
    PARTNER_TYPES,
    Partner,
    PartnerRequest,
)

__all__ = ["PARTNER_STATUSES", "PARTNER_TYPES", "Partner", "PartnerRequest"]
