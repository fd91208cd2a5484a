"""Taskboard relational models, used by the SQL storage backend."""
from taskboard.models.user import User
from taskboard.models.project import Project
from taskboard.models.project_member import ProjectMember
from taskboard.models.board import Board
from taskboard.models.column import BoardColumn
from taskboard.models.task import Task

__all__ = [
    "User",
    "Project",
    "ProjectMember",
    "Board",
    "BoardColumn",
    "Task",
]
