"""User endpoints (people available as members and assignees)"""
from typing import List

from fastapi import APIRouter, Depends, Response, status

from taskboard.dependencies import get_storage
from taskboard.errors import NotFoundError
from taskboard.schemas import UserCreate, UserRecord, UserUpdate
from taskboard.services import cascade
from taskboard.storage import Storage

router = APIRouter()


@router.get("", response_model=List[UserRecord])
def list_users(storage: Storage = Depends(get_storage)):
    return storage.users.find_all()


@router.post("", response_model=UserRecord, status_code=status.HTTP_201_CREATED)
def create_user(user_in: UserCreate, storage: Storage = Depends(get_storage)):
    return storage.users.create(user_in)


@router.get("/{user_id}", response_model=UserRecord)
def get_user(user_id: str, storage: Storage = Depends(get_storage)):
    user = storage.users.find_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.put("/{user_id}", response_model=UserRecord)
def update_user(user_id: str, user_in: UserUpdate, storage: Storage = Depends(get_storage)):
    user = storage.users.update(user_id, user_in)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: str, storage: Storage = Depends(get_storage)):
    """Delete a user; their tasks stay, unassigned."""
    result = cascade.delete_user(storage, user_id)
    if not result.found:
        raise NotFoundError("User not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
