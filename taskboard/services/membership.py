"""Project membership: who belongs to a project, and with which role.

Membership only scopes the assignee choices offered for a project's tasks;
no access control is derived from it.
"""
from __future__ import annotations

from typing import List, Optional

from taskboard.errors import ConflictError, NotFoundError
from taskboard.schemas import (
    MemberRole,
    MemberWithUser,
    ProjectMemberCreate,
    ProjectMemberRecord,
    ProjectRecord,
    UserRecord,
)
from taskboard.storage import Storage


def add_member(storage: Storage, project_id: str, user_id: str, role: MemberRole = MemberRole.MEMBER) -> MemberWithUser:
    project = storage.projects.find_by_id(project_id)
    if project is None:
        raise NotFoundError("Project not found")
    user = storage.users.find_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")

    if storage.members.find_by_project_and_user(project_id, user_id) is not None:
        raise ConflictError("User is already a member of this project")

    member = storage.members.create(ProjectMemberCreate(project_id=project_id, user_id=user_id, role=role))
    return MemberWithUser(**member.model_dump(), user=user)


def find_member(storage: Storage, project_id: str, user_id: str) -> Optional[ProjectMemberRecord]:
    return storage.members.find_by_project_and_user(project_id, user_id)


def remove_member(storage: Storage, project_id: str, user_id: str) -> bool:
    """Remove the membership identified by the ``(project, user)`` pair."""
    member = find_member(storage, project_id, user_id)
    if member is None:
        return False
    return storage.members.delete(member.id)


def update_role(storage: Storage, project_id: str, user_id: str, role: MemberRole) -> Optional[MemberWithUser]:
    member = find_member(storage, project_id, user_id)
    if member is None:
        return None
    updated = storage.members.update(member.id, {"role": role})
    if updated is None:
        return None
    return MemberWithUser(**updated.model_dump(), user=storage.users.find_by_id(user_id))


def list_members(storage: Storage, project_id: str) -> List[MemberWithUser]:
    """Members of a project joined with their user details."""
    members = storage.members.find_by_project_id(project_id)
    if not members:
        return []
    users = {user.id: user for user in storage.users.find_all()}
    return [MemberWithUser(**member.model_dump(), user=users.get(member.user_id)) for member in members]


def list_projects_for_user(storage: Storage, user_id: str) -> List[ProjectRecord]:
    projects = []
    for member in storage.members.find_by_user_id(user_id):
        project = storage.projects.find_by_id(member.project_id)
        if project is not None:
            projects.append(project)
    return projects


def assignable_users(storage: Storage, project_id: str) -> List[UserRecord]:
    """Users that can be picked as assignee for tasks of ``project_id``."""
    return [member.user for member in list_members(storage, project_id) if member.user is not None]
