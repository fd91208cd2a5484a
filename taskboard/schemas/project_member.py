"""Schemas for project members"""
import enum
from typing import Optional

from pydantic import BaseModel

from taskboard.schemas.common import RecordBase
from taskboard.schemas.user import UserRecord


class MemberRole(str, enum.Enum):
    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"
    VIEWER = "viewer"


class ProjectMemberCreate(BaseModel):
    project_id: str
    user_id: str
    role: MemberRole = MemberRole.MEMBER


class ProjectMemberUpdate(BaseModel):
    role: Optional[MemberRole] = None


class MemberAdd(BaseModel):
    """Body of ``POST /members/project/{project_id}``."""

    user_id: str
    role: MemberRole = MemberRole.MEMBER


class MemberRoleUpdate(BaseModel):
    role: MemberRole


class ProjectMemberRecord(RecordBase):
    project_id: str
    user_id: str
    role: MemberRole = MemberRole.MEMBER


class MemberWithUser(ProjectMemberRecord):
    user: Optional[UserRecord] = None
