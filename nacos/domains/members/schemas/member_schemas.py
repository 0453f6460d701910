"""Member management schemas."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from nacos.core.auth.constants import MEMBERSHIP_ACTIVE, MEMBERSHIP_STATUSES

SORTABLE_COLUMNS = (
    "full_name",
    "matric_no",
    "department",
    "level",
    "registration_date",
    "membership_status",
)
LEVELS = ("100", "200", "300", "400", "500")
GENDERS = ("Male", "Female")


def _drop_blanks(values):
    if isinstance(values, dict):
        return {k: v for k, v in values.items() if not (isinstance(v, str) and not v.strip())}
    return values


class Pagination(BaseModel):
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=20, ge=1, le=100)


class MemberListFilter(Pagination):
    search: Optional[str] = Field(default=None, max_length=255)
    department: Optional[str] = None
    level: Optional[str] = None
    status: Optional[str] = None
    approval: Optional[str] = None
    sort: str = "registration_date"
    order: str = "desc"

    @model_validator(mode="before")
    @classmethod
    def strip_blanks(cls, values):
        return _drop_blanks(values)

    @field_validator("sort", mode="before")
    @classmethod
    def known_sort(cls, v) -> str:
        return v if v in SORTABLE_COLUMNS else "registration_date"

    @field_validator("order", mode="before")
    @classmethod
    def known_order(cls, v) -> str:
        return "asc" if v == "asc" else "desc"

    @field_validator("approval")
    @classmethod
    def known_approval(cls, v: Optional[str]) -> Optional[str]:
        return v if v in ("pending", "approved") else None


class MemberForm(BaseModel):
    matric_no: str = Field(min_length=1, max_length=16)
    full_name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    department: str = Field(min_length=1, max_length=128)
    level: str = Field(min_length=1, max_length=16)
    registration_date: dt.date
    username: Optional[str] = Field(default=None, max_length=64)
    phone: Optional[str] = Field(default=None, max_length=32)
    gender: Optional[str] = Field(default=None, max_length=16)
    membership_status: str = MEMBERSHIP_ACTIVE
    bio: Optional[str] = Field(default=None, max_length=4096)
    github_username: Optional[str] = Field(default=None, max_length=64)
    linkedin_url: Optional[str] = Field(default=None, max_length=255)
    skills: Optional[str] = Field(default=None, max_length=4096)
    password: Optional[str] = Field(default=None, min_length=8, max_length=1024)

    @model_validator(mode="before")
    @classmethod
    def strip_blanks(cls, values):
        return _drop_blanks(values)

    @field_validator("matric_no")
    @classmethod
    def normalize_matric(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("full_name", "department", "level")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator("membership_status")
    @classmethod
    def known_status(cls, v: str) -> str:
        if v not in MEMBERSHIP_STATUSES:
            raise ValueError("unknown membership status")
        return v

    @property
    def login_name(self) -> str:
        return (self.username or self.matric_no).strip().lower()
