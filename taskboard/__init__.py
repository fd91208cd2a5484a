"""Taskboard: projects, boards, ordered columns and tasks over pluggable storage."""

__version__ = "1.0.0"
