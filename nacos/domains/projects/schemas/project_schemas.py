"""Project schemas."""

from __future__ import annotations

import datetime as dt
import re
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from nacos.domains.projects.models.project_models import PROJECT_STATUSES, STATUS_ALIASES


def _split(text: Optional[str], pattern: str) -> List[str]:
    if not text:
        return []
    return [part.strip() for part in re.split(pattern, text) if part.strip()]


class ProjectListFilter(BaseModel):
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=12, ge=1, le=100)
    search: Optional[str] = Field(default=None, max_length=255)
    status: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def known_status(cls, v):
        v = STATUS_ALIASES.get(v, v)
        return v if v in PROJECT_STATUSES else None


class ProjectForm(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1, max_length=8192)
    project_status: str
    start_date: dt.date
    completion_date: Optional[dt.date] = None
    repository_link: Optional[str] = Field(default=None, max_length=512)
    technologies: List[str] = []
    key_features: List[str] = []
    members: List[int] = []

    @model_validator(mode="before")
    @classmethod
    def drop_blanks(cls, values):
        if isinstance(values, dict):
            return {k: v for k, v in values.items() if not (isinstance(v, str) and not v.strip())}
        return values

    @field_validator("title", "description")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator("project_status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        v = STATUS_ALIASES.get(v, v)
        if v not in PROJECT_STATUSES:
            raise ValueError("unknown project status")
        return v

    @field_validator("technologies", mode="before")
    @classmethod
    def split_technologies(cls, v):
        # Comma or newline separated
        return _split(v, r"[,\n]+") if isinstance(v, str) else v

    @field_validator("key_features", mode="before")
    @classmethod
    def split_features(cls, v):
        return _split(v, r"\n+") if isinstance(v, str) else v

    @field_validator("members", mode="before")
    @classmethod
    def unique_members(cls, v):
        if not v:
            return []
        seen = []
        for item in v:
            if item not in ("", None) and item not in seen:
                seen.append(item)
        return seen

    @model_validator(mode="after")
    def completion_after_start(self):
        if self.completion_date and self.completion_date < self.start_date:
            raise ValueError("Completion date cannot be before start date.")
        return self

    @property
    def tech_stack(self) -> dict:
        return {"technologies": self.technologies, "features": self.key_features}
