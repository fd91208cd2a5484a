"""Storage health endpoint"""
from fastapi import APIRouter, Depends, Response, status

from taskboard.dependencies import get_storage
from taskboard.schemas import HealthStatus
from taskboard.storage import Storage

router = APIRouter()


@router.get("/health", response_model=HealthStatus)
def health(response: Response, storage: Storage = Depends(get_storage)):
    result = storage.check_health()
    if result.status != "connected":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return result
