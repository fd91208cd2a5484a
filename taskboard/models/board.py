"""
Board Model
"""
from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from taskboard.database import Base


class Board(Base):
    __tablename__ = "boards"

    id = Column(String(36), primary_key=True)
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
