"""Partner schemas."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from nacos.domains.partners.models.partner_models import PARTNER_STATUSES, PARTNER_TYPES


def _drop_blanks(values):
    if isinstance(values, dict):
        return {k: v for k, v in values.items() if not (isinstance(v, str) and not v.strip())}
    return values


class PartnerListFilter(BaseModel):
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=20, ge=1, le=100)
    search: Optional[str] = Field(default=None, max_length=255)
    type: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def strip_blanks(cls, values):
        return _drop_blanks(values)


class PartnerForm(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    partner_type: str
    status: str = "active"
    description: Optional[str] = Field(default=None, max_length=8192)
    website_url: Optional[str] = Field(default=None, max_length=512)
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = Field(default=None, max_length=32)
    partnership_since: Optional[dt.date] = None
    display_order: int = Field(default=0, ge=0)
    is_featured: bool = False

    @model_validator(mode="before")
    @classmethod
    def strip_blanks(cls, values):
        return _drop_blanks(values)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("partner_type")
    @classmethod
    def known_type(cls, v: str) -> str:
        if v not in PARTNER_TYPES:
            raise ValueError("unknown partner type")
        return v

    @field_validator("status")
    @classmethod
    def known_status(cls, v: str) -> str:
        if v not in PARTNER_STATUSES:
            raise ValueError("unknown partner status")
        return v


class PartnerRequestForm(BaseModel):
    company_name: str = Field(min_length=1, max_length=255)
    contact_name: str = Field(min_length=1, max_length=255)
    contact_email: EmailStr
    website_url: Optional[str] = Field(default=None, max_length=512)
    message: Optional[str] = Field(default=None, max_length=8192)

    @model_validator(mode="before")
    @classmethod
    def strip_blanks(cls, values):
        return _drop_blanks(values)

    @field_validator("company_name", "contact_name")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


REQUEST_FIELD_ERRORS = {
    "company_name": "Company / Organisation name is required.",
    "contact_name": "Contact name is required.",
    "contact_email": "A valid contact email is required.",
}
