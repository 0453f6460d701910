from nacos.domains.partners.services.partner_service import (
    active_partner_count,
    create_partner,
    delete_partner,
    delete_partner_request,
    get_partner,
    list_partner_requests,
    list_partners,
    set_featured,
    submit_partner_request,
    update_partner,
)

__all__ = [
    "active_partner_count",
    "create_partner",
    "delete_partner",
    "delete_partner_request",
    "get_partner",
    "list_partner_requests",
    "list_partners",
    "set_featured",
    "submit_partner_request",
    "update_partner",
]
