"""Schemas for tasks"""
import enum
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from taskboard.schemas.common import RecordBase


class TaskPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    board_id: str = Field(..., min_length=1)
    column_id: str = Field(..., min_length=1)
    description: Optional[str] = None
    priority: TaskPriority = TaskPriority.MEDIUM
    assignee_id: Optional[str] = None
    position: Optional[int] = Field(default=None, ge=0)
    due_date: Optional[datetime] = None


class TaskUpdate(BaseModel):
    """Editable task fields; moving between columns goes through ``TaskMove``."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    assignee_id: Optional[str] = None
    position: Optional[int] = Field(default=None, ge=0)
    due_date: Optional[datetime] = None


class TaskMove(BaseModel):
    column_id: str = Field(..., min_length=1)
    position: Optional[int] = Field(default=None, ge=0)


class TaskReorder(BaseModel):
    task_ids: List[str] = Field(..., alias="taskIds")

    class Config:
        populate_by_name = True


class TaskRecord(RecordBase):
    board_id: str
    column_id: str
    title: str
    description: Optional[str] = None
    priority: TaskPriority = TaskPriority.MEDIUM
    assignee_id: Optional[str] = None
    position: int = Field(..., ge=0)
    due_date: Optional[datetime] = None

    @field_validator("due_date")
    @classmethod
    def _due_date_as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
