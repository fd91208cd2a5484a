"""Version 1 of the REST API"""
from fastapi import APIRouter

from taskboard.api.v1 import boards, columns, health, members, projects, tasks, users

api_router = APIRouter()
api_router.include_router(health.router, tags=["health"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(members.router, prefix="/members", tags=["members"])
api_router.include_router(boards.router, prefix="/boards", tags=["boards"])
api_router.include_router(columns.router, prefix="/columns", tags=["columns"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
