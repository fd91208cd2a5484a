"""Schemas for boards"""
from typing import Optional

from pydantic import BaseModel, Field

from taskboard.schemas.common import RecordBase


class BoardCreate(BaseModel):
    project_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class BoardUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None


class BoardRecord(RecordBase):
    project_id: str
    name: str
    description: Optional[str] = None
