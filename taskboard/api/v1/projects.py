"""Project endpoints"""
from typing import List

from fastapi import APIRouter, Depends, status

from taskboard.dependencies import get_storage
from taskboard.errors import NotFoundError
from taskboard.schemas import BoardRecord, CascadeSummary, ProjectCreate, ProjectRecord, ProjectUpdate
from taskboard.services import cascade
from taskboard.storage import Storage

router = APIRouter()


@router.get("", response_model=List[ProjectRecord])
def list_projects(storage: Storage = Depends(get_storage)):
    """List projects, newest first."""
    return list(reversed(storage.projects.find_all()))


@router.post("", response_model=ProjectRecord, status_code=status.HTTP_201_CREATED)
def create_project(project_in: ProjectCreate, storage: Storage = Depends(get_storage)):
    return storage.projects.create(project_in)


@router.get("/{project_id}", response_model=ProjectRecord)
def get_project(project_id: str, storage: Storage = Depends(get_storage)):
    project = storage.projects.find_by_id(project_id)
    if project is None:
        raise NotFoundError("Project not found")
    return project


@router.get("/{project_id}/boards", response_model=List[BoardRecord])
def list_project_boards(project_id: str, storage: Storage = Depends(get_storage)):
    return storage.boards.find_by_project_id(project_id)


@router.put("/{project_id}", response_model=ProjectRecord)
def update_project(project_id: str, project_in: ProjectUpdate, storage: Storage = Depends(get_storage)):
    project = storage.projects.update(project_id, project_in)
    if project is None:
        raise NotFoundError("Project not found")
    return project


@router.delete("/{project_id}", response_model=CascadeSummary)
def delete_project(project_id: str, storage: Storage = Depends(get_storage)):
    """Delete a project along with its memberships, boards, columns and tasks."""
    result = cascade.delete_project(storage, project_id)
    if not result.found:
        raise NotFoundError("Project not found")
    return result.summary()
