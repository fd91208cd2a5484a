"""Common system-level response models"""
from typing import Dict, List

from pydantic import BaseModel, Field


class HealthStatus(BaseModel):
    """State of the configured storage medium."""

    status: str = Field(description="'connected' or 'error'")
    message: str
    backend: str


class ReorderResponse(BaseModel):
    success: bool = True
    updated: int = 0


class CascadeFailureOut(BaseModel):
    kind: str
    id: str
    error: str


class CascadeSummary(BaseModel):
    deleted: Dict[str, int] = Field(default_factory=dict)
    failures: List[CascadeFailureOut] = Field(default_factory=list)
