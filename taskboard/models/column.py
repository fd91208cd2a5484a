"""
Board Column Model
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from taskboard.database import Base


class BoardColumn(Base):
    __tablename__ = "columns"

    id = Column(String(36), primary_key=True)
    board_id = Column(String(36), ForeignKey("boards.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    color = Column(String(32), default="#6B7280", nullable=False)
    position = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
