"""Schemas for projects"""
from typing import Optional

from pydantic import BaseModel, Field

from taskboard.schemas.common import RecordBase

DEFAULT_PROJECT_COLOR = "#3B82F6"


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    color: str = DEFAULT_PROJECT_COLOR


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    color: Optional[str] = None


class ProjectRecord(RecordBase):
    name: str
    description: Optional[str] = None
    color: str = DEFAULT_PROJECT_COLOR
