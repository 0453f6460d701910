"""Partner and partnership request service layer."""

from __future__ import annotations

import logging
from typing import List, Optional

from flask import current_app
from sqlalchemy import or_
from werkzeug.datastructures import FileStorage

from nacos.core.utils.pagination import paginate
from nacos.core.utils.uploads import remove_upload, store_upload
from nacos.domains.partners.models.partner_models import Partner, PartnerRequest
from nacos.domains.partners.schemas.partner_schemas import (
    PartnerForm,
    PartnerListFilter,
    PartnerRequestForm,
)
from nacos.extensions import db

logger = logging.getLogger(__name__)

UPLOAD_SUBDIR = "partners"


def list_partners(filters: PartnerListFilter) -> dict:
    query = Partner.query
    if filters.search:
        term = f"%{filters.search.strip()}%"
        query = query.filter(or_(Partner.name.ilike(term), Partner.description.ilike(term)))
    if filters.type:
        query = query.filter(Partner.partner_type == filters.type)
    query = query.order_by(Partner.display_order.asc(), Partner.partnership_since.desc(), Partner.created_at.desc())
    return paginate(query, page=filters.page, per_page=filters.per_page)


def get_partner(partner_id: int) -> Optional[Partner]:
    return db.session.get(Partner, partner_id)


def _save_logo(upload: Optional[FileStorage]) -> Optional[str]:
    return store_upload(
        upload,
        subdir=UPLOAD_SUBDIR,
        allowed=current_app.config["LOGO_ALLOWED_EXTENSIONS"],
        max_bytes=current_app.config["LOGO_MAX_BYTES"],
    )


def _apply(partner: Partner, data: PartnerForm) -> None:
    for field in (
        "name",
        "partner_type",
        "status",
        "description",
        "website_url",
        "contact_email",
        "contact_phone",
        "partnership_since",
        "display_order",
        "is_featured",
    ):
        setattr(partner, field, getattr(data, field))


def create_partner(data: PartnerForm, logo: Optional[FileStorage] = None) -> Partner:
    logo_path = _save_logo(logo)
    partner = Partner(logo_path=logo_path)
    _apply(partner, data)
    db.session.add(partner)
    db.session.commit()
    logger.info("Partner %s added", partner.id)
    return partner


def update_partner(partner_id: int, data: PartnerForm, logo: Optional[FileStorage] = None) -> Partner:
    partner = get_partner(partner_id)
    if partner is None:
        raise ValueError("not_found")
    logo_path = _save_logo(logo)
    previous = partner.logo_path
    _apply(partner, data)
    if logo_path:
        partner.logo_path = logo_path
    db.session.commit()
    if logo_path and previous:
        remove_upload(previous)
    return partner


def set_featured(partner_id: int, featured: bool) -> Partner:
    partner = get_partner(partner_id)
    if partner is None:
        raise ValueError("not_found")
    partner.is_featured = featured
    db.session.commit()
    return partner


def delete_partner(partner_id: int) -> bool:
    partner = get_partner(partner_id)
    if partner is None:
        return False
    logo_path = partner.logo_path
    db.session.delete(partner)
    db.session.commit()
    remove_upload(logo_path)
    return True


def active_partner_count() -> int:
    return Partner.query.filter(Partner.status == "active").count()


def submit_partner_request(data: PartnerRequestForm, remote_addr: Optional[str] = None) -> PartnerRequest:
    request_row = PartnerRequest(
        company_name=data.company_name,
        contact_name=data.contact_name,
        contact_email=str(data.contact_email),
        website_url=data.website_url,
        message=data.message,
        remote_addr=remote_addr,
    )
    db.session.add(request_row)
    db.session.commit()
    logger.info("Partnership request %s from %s", request_row.id, data.company_name)
    return request_row


def list_partner_requests() -> List[PartnerRequest]:
    return PartnerRequest.query.order_by(PartnerRequest.created_at.desc(), PartnerRequest.id.desc()).all()


def delete_partner_request(request_id: int) -> bool:
    row = db.session.get(PartnerRequest, request_id)
    if row is None:
        return False
    db.session.delete(row)
    db.session.commit()
    return True
