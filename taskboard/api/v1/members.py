"""Project membership endpoints"""
from typing import List

from fastapi import APIRouter, Depends, Response, status

from taskboard.dependencies import get_storage
from taskboard.errors import NotFoundError
from taskboard.schemas import MemberAdd, MemberRoleUpdate, MemberWithUser, ProjectRecord, UserRecord
from taskboard.services import membership
from taskboard.storage import Storage

router = APIRouter()


@router.get("/project/{project_id}", response_model=List[MemberWithUser])
def list_project_members(project_id: str, storage: Storage = Depends(get_storage)):
    return membership.list_members(storage, project_id)


@router.post("/project/{project_id}", response_model=MemberWithUser, status_code=status.HTTP_201_CREATED)
def add_project_member(project_id: str, member_in: MemberAdd, storage: Storage = Depends(get_storage)):
    return membership.add_member(storage, project_id, member_in.user_id, member_in.role)


@router.get("/project/{project_id}/assignees", response_model=List[UserRecord])
def list_assignable_users(project_id: str, storage: Storage = Depends(get_storage)):
    """Users that may be picked as assignee on the project's tasks."""
    return membership.assignable_users(storage, project_id)


@router.put("/project/{project_id}/user/{user_id}", response_model=MemberWithUser)
def update_member_role(
    project_id: str,
    user_id: str,
    role_in: MemberRoleUpdate,
    storage: Storage = Depends(get_storage),
):
    member = membership.update_role(storage, project_id, user_id, role_in.role)
    if member is None:
        raise NotFoundError("Member not found")
    return member


@router.delete("/project/{project_id}/user/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_project_member(project_id: str, user_id: str, storage: Storage = Depends(get_storage)):
    if not membership.remove_member(storage, project_id, user_id):
        raise NotFoundError("Member not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/user/{user_id}/projects", response_model=List[ProjectRecord])
def list_user_projects(user_id: str, storage: Storage = Depends(get_storage)):
    return membership.list_projects_for_user(storage, user_id)
