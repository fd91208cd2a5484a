"""Error taxonomy shared by the storage layer, the services and the API."""

from __future__ import annotations

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.requests import Request


class TaskboardError(Exception):
    """Base class for domain-specific errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str, *, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class ValidationError(TaskboardError):
    """A request is missing required data or references something invalid."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(TaskboardError):
    """A referenced entity is absent. Storage itself reports absence with ``None``."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(TaskboardError):
    """A unique constraint (membership pair, user email) would be violated."""

    status_code = status.HTTP_409_CONFLICT


class HasDependentsError(TaskboardError):
    """A column still owns tasks and the delete policy is ``block``."""

    status_code = status.HTTP_400_BAD_REQUEST


class StorageUnavailableError(TaskboardError):
    """The storage medium (disk, network, database) could not be reached."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the provided FastAPI app."""

    @app.exception_handler(TaskboardError)
    async def _handle_taskboard_error(request: Request, exc: TaskboardError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def _handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Missing or malformed body fields are reported like any other ValidationError
        messages = []
        for err in exc.errors():
            location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
            message = str(err.get("msg", "invalid value"))
            messages.append(f"{location}: {message}" if location else message)
        return JSONResponse(
            status_code=ValidationError.status_code,
            content={"detail": "; ".join(messages) or "Invalid request"},
        )


__all__ = [
    "ConflictError",
    "HasDependentsError",
    "NotFoundError",
    "StorageUnavailableError",
    "TaskboardError",
    "ValidationError",
    "register_exception_handlers",
]
