"""Resource schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from nacos.domains.members.schemas.member_schemas import LEVELS
from nacos.domains.resources.models.resource_models import RESOURCE_TYPES


class ResourceListFilter(BaseModel):
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=20, ge=1, le=100)
    search: Optional[str] = Field(default=None, max_length=255)
    type: Optional[str] = None
    level: Optional[str] = None
    featured: Optional[bool] = None

    @model_validator(mode="before")
    @classmethod
    def drop_blanks(cls, values):
        if isinstance(values, dict):
            return {k: v for k, v in values.items() if v not in ("", None)}
        return values


class ResourceForm(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    resource_type: str
    level: str
    description: Optional[str] = Field(default=None, max_length=8192)
    course_code: Optional[str] = Field(default=None, max_length=32)
    tags: Optional[str] = Field(default=None, max_length=512)
    external_link: Optional[str] = Field(default=None, max_length=512)
    is_featured: bool = False

    @model_validator(mode="before")
    @classmethod
    def drop_blanks(cls, values):
        if isinstance(values, dict):
            return {k: v for k, v in values.items() if not (isinstance(v, str) and not v.strip())}
        return values

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return v.strip()

    @field_validator("resource_type")
    @classmethod
    def known_type(cls, v: str) -> str:
        if v not in RESOURCE_TYPES:
            raise ValueError("unknown resource type")
        return v

    @field_validator("level")
    @classmethod
    def known_level(cls, v: str) -> str:
        if v not in LEVELS:
            raise ValueError("unknown level")
        return v

    @field_validator("course_code")
    @classmethod
    def upper_course_code(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().upper() if v else v
