"""Document schemas."""

from __future__ import annotations

import datetime as dt
import re
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from nacos.domains.documents.models.document_models import DOCUMENT_TYPES, VISIBILITY_LEVELS

_SESSION_PATTERN = re.compile(r"^\d{4}/\d{4}$")


def _drop_blanks(values):
    if isinstance(values, dict):
        return {k: v for k, v in values.items() if not (isinstance(v, str) and not v.strip())}
    return values


class DocumentListFilter(BaseModel):
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=15, ge=1, le=100)
    search: Optional[str] = Field(default=None, max_length=255)
    type: Optional[str] = None
    visibility: Optional[str] = None
    archived: Literal["active", "archived", "all"] = "active"

    @model_validator(mode="before")
    @classmethod
    def strip_blanks(cls, values):
        return _drop_blanks(values)


class DocumentForm(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    doc_type: str
    visibility: str = "admin"
    description: Optional[str] = Field(default=None, max_length=8192)
    document_date: Optional[dt.date] = None
    academic_session: Optional[str] = None
    tags: Optional[str] = Field(default=None, max_length=512)
    is_archived: bool = False

    @model_validator(mode="before")
    @classmethod
    def strip_blanks(cls, values):
        return _drop_blanks(values)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return v.strip()

    @field_validator("doc_type")
    @classmethod
    def known_type(cls, v: str) -> str:
        if v not in DOCUMENT_TYPES:
            raise ValueError("unknown document type")
        return v

    @field_validator("visibility")
    @classmethod
    def known_visibility(cls, v: str) -> str:
        if v not in VISIBILITY_LEVELS:
            raise ValueError("unknown visibility")
        return v

    @field_validator("academic_session")
    @classmethod
    def session_format(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not _SESSION_PATTERN.match(v):
            raise ValueError("academic session must look like 2024/2025")
        return v
