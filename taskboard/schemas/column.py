"""Schemas for board columns"""
from typing import List, Optional

from pydantic import BaseModel, Field

from taskboard.schemas.common import RecordBase

DEFAULT_COLUMN_COLOR = "#6B7280"


class ColumnCreate(BaseModel):
    board_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=255)
    color: str = DEFAULT_COLUMN_COLOR
    position: Optional[int] = Field(default=None, ge=0)


class ColumnUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    color: Optional[str] = None
    position: Optional[int] = Field(default=None, ge=0)


class ColumnReorder(BaseModel):
    """New left-to-right order of a board's columns."""

    column_ids: List[str] = Field(..., alias="columnIds")
    board_id: Optional[str] = None

    class Config:
        populate_by_name = True


class ColumnRecord(RecordBase):
    board_id: str
    name: str
    color: str = DEFAULT_COLUMN_COLOR
    position: int = Field(..., ge=0)
