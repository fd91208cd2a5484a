"""Schemas for users (people that can be members and assignees)"""
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from taskboard.schemas.common import RecordBase


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    avatar: Optional[str] = None


class UserUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    avatar: Optional[str] = None


class UserRecord(RecordBase):
    name: str
    email: str
    avatar: Optional[str] = None
