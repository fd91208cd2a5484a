"""
Pydantic schemas for request/response validation and persisted records
"""
from taskboard.schemas.common import RecordBase, utcnow
from taskboard.schemas.user import UserCreate, UserRecord, UserUpdate
from taskboard.schemas.project import ProjectCreate, ProjectRecord, ProjectUpdate
from taskboard.schemas.project_member import (
    MemberAdd,
    MemberRole,
    MemberRoleUpdate,
    MemberWithUser,
    ProjectMemberCreate,
    ProjectMemberRecord,
    ProjectMemberUpdate,
)
from taskboard.schemas.board import BoardCreate, BoardRecord, BoardUpdate
from taskboard.schemas.column import ColumnCreate, ColumnRecord, ColumnReorder, ColumnUpdate
from taskboard.schemas.task import TaskCreate, TaskMove, TaskPriority, TaskRecord, TaskReorder, TaskUpdate
from taskboard.schemas.system import CascadeFailureOut, CascadeSummary, HealthStatus, ReorderResponse

__all__ = [
    "RecordBase",
    "utcnow",
    "UserCreate",
    "UserRecord",
    "UserUpdate",
    "ProjectCreate",
    "ProjectRecord",
    "ProjectUpdate",
    "MemberAdd",
    "MemberRole",
    "MemberRoleUpdate",
    "MemberWithUser",
    "ProjectMemberCreate",
    "ProjectMemberRecord",
    "ProjectMemberUpdate",
    "BoardCreate",
    "BoardRecord",
    "BoardUpdate",
    "ColumnCreate",
    "ColumnRecord",
    "ColumnReorder",
    "ColumnUpdate",
    "TaskCreate",
    "TaskMove",
    "TaskPriority",
    "TaskRecord",
    "TaskReorder",
    "TaskUpdate",
    "CascadeFailureOut",
    "CascadeSummary",
    "HealthStatus",
    "ReorderResponse",
]
