"""Shared dependencies for API routes"""
from fastapi import Request

from taskboard.config import Settings
from taskboard.storage import Storage


def get_storage(request: Request) -> Storage:
    """Return the storage instance owned by the running application."""
    return request.app.state.storage


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
