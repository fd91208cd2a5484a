"""
Task Model
"""
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text
from taskboard.database import Base


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True)
    board_id = Column(String(36), ForeignKey("boards.id"), nullable=False, index=True)
    column_id = Column(String(36), ForeignKey("columns.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    priority = Column(String(16), default="medium", nullable=False)
    assignee_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    position = Column(Integer, default=0, nullable=False)
    due_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        CheckConstraint("priority IN ('low', 'medium', 'high', 'urgent')", name="ck_tasks_priority"),
    )
