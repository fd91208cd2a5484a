"""Column endpoints"""
from typing import List

from fastapi import APIRouter, Depends, Response, status

from taskboard.config import Settings
from taskboard.dependencies import get_app_settings, get_storage
from taskboard.errors import NotFoundError
from taskboard.schemas import ColumnCreate, ColumnRecord, ColumnReorder, ColumnUpdate, ReorderResponse
from taskboard.services import cascade, ordering
from taskboard.storage import Storage

router = APIRouter()


@router.get("/board/{board_id}", response_model=List[ColumnRecord])
def list_board_columns(board_id: str, storage: Storage = Depends(get_storage)):
    """Columns of a board sorted by position."""
    return storage.columns.find_by_board_id(board_id)


@router.post("", response_model=ColumnRecord, status_code=status.HTTP_201_CREATED)
def create_column(column_in: ColumnCreate, storage: Storage = Depends(get_storage)):
    return ordering.create_column(storage, column_in)


@router.patch("/reorder", response_model=ReorderResponse)
def reorder_columns(payload: ColumnReorder, storage: Storage = Depends(get_storage)):
    updated = ordering.reorder_columns(storage, payload.column_ids, board_id=payload.board_id)
    return ReorderResponse(updated=updated)


@router.patch("/board/{board_id}/compact", response_model=List[ColumnRecord])
def compact_board_columns(board_id: str, storage: Storage = Depends(get_storage)):
    if storage.boards.find_by_id(board_id) is None:
        raise NotFoundError("Board not found")
    return ordering.compact_board(storage, board_id)


@router.get("/{column_id}", response_model=ColumnRecord)
def get_column(column_id: str, storage: Storage = Depends(get_storage)):
    column = storage.columns.find_by_id(column_id)
    if column is None:
        raise NotFoundError("Column not found")
    return column


@router.put("/{column_id}", response_model=ColumnRecord)
def update_column(column_id: str, column_in: ColumnUpdate, storage: Storage = Depends(get_storage)):
    column = storage.columns.update(column_id, column_in)
    if column is None:
        raise NotFoundError("Column not found")
    return column


@router.delete("/{column_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_column(
    column_id: str,
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
):
    result = cascade.delete_column(storage, column_id, policy=settings.COLUMN_DELETE_POLICY)
    if not result.found:
        raise NotFoundError("Column not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
