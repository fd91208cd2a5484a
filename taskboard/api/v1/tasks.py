"""Task endpoints"""
from typing import List

from fastapi import APIRouter, Depends, Response, status

from taskboard.dependencies import get_storage
from taskboard.errors import NotFoundError, ValidationError
from taskboard.schemas import ReorderResponse, TaskCreate, TaskMove, TaskRecord, TaskReorder, TaskUpdate
from taskboard.services import ordering
from taskboard.storage import Storage

router = APIRouter()


@router.get("/board/{board_id}", response_model=List[TaskRecord])
def list_board_tasks(board_id: str, storage: Storage = Depends(get_storage)):
    return storage.tasks.find_by_board_id(board_id)


@router.get("/column/{column_id}", response_model=List[TaskRecord])
def list_column_tasks(column_id: str, storage: Storage = Depends(get_storage)):
    return storage.tasks.find_by_column_id(column_id)


@router.post("", response_model=TaskRecord, status_code=status.HTTP_201_CREATED)
def create_task(task_in: TaskCreate, storage: Storage = Depends(get_storage)):
    return ordering.create_task(storage, task_in)


@router.patch("/column/{column_id}/reorder", response_model=ReorderResponse)
def reorder_column_tasks(column_id: str, payload: TaskReorder, storage: Storage = Depends(get_storage)):
    updated = ordering.reorder_tasks(storage, column_id, payload.task_ids)
    return ReorderResponse(updated=updated)


@router.patch("/column/{column_id}/compact", response_model=List[TaskRecord])
def compact_column_tasks(column_id: str, storage: Storage = Depends(get_storage)):
    if storage.columns.find_by_id(column_id) is None:
        raise NotFoundError("Column not found")
    return ordering.compact_column(storage, column_id)


@router.get("/{task_id}", response_model=TaskRecord)
def get_task(task_id: str, storage: Storage = Depends(get_storage)):
    task = storage.tasks.find_by_id(task_id)
    if task is None:
        raise NotFoundError("Task not found")
    return task


@router.put("/{task_id}", response_model=TaskRecord)
def update_task(task_id: str, task_in: TaskUpdate, storage: Storage = Depends(get_storage)):
    if task_in.assignee_id is not None and storage.users.find_by_id(task_in.assignee_id) is None:
        raise ValidationError(f"User {task_in.assignee_id} not found")
    task = storage.tasks.update(task_id, task_in)
    if task is None:
        raise NotFoundError("Task not found")
    return task


@router.patch("/{task_id}/move", response_model=TaskRecord)
def move_task(task_id: str, move_in: TaskMove, storage: Storage = Depends(get_storage)):
    task = ordering.move_task(storage, task_id, move_in.column_id, move_in.position)
    if task is None:
        raise NotFoundError("Task not found")
    return task


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: str, storage: Storage = Depends(get_storage)):
    if not storage.tasks.delete(task_id):
        raise NotFoundError("Task not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
