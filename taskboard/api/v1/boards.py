"""Board endpoints"""
from typing import List

from fastapi import APIRouter, Depends, Response, status

from taskboard.dependencies import get_storage
from taskboard.errors import NotFoundError, ValidationError
from taskboard.schemas import BoardCreate, BoardRecord, BoardUpdate
from taskboard.services import cascade
from taskboard.storage import Storage

router = APIRouter()


@router.get("/project/{project_id}", response_model=List[BoardRecord])
def list_project_boards(project_id: str, storage: Storage = Depends(get_storage)):
    return storage.boards.find_by_project_id(project_id)


@router.post("", response_model=BoardRecord, status_code=status.HTTP_201_CREATED)
def create_board(board_in: BoardCreate, storage: Storage = Depends(get_storage)):
    if storage.projects.find_by_id(board_in.project_id) is None:
        raise ValidationError(f"Project {board_in.project_id} not found")
    return storage.boards.create(board_in)


@router.get("/{board_id}", response_model=BoardRecord)
def get_board(board_id: str, storage: Storage = Depends(get_storage)):
    board = storage.boards.find_by_id(board_id)
    if board is None:
        raise NotFoundError("Board not found")
    return board


@router.put("/{board_id}", response_model=BoardRecord)
def update_board(board_id: str, board_in: BoardUpdate, storage: Storage = Depends(get_storage)):
    board = storage.boards.update(board_id, board_in)
    if board is None:
        raise NotFoundError("Board not found")
    return board


@router.delete("/{board_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_board(board_id: str, storage: Storage = Depends(get_storage)):
    result = cascade.delete_board(storage, board_id)
    if not result.found:
        raise NotFoundError("Board not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
