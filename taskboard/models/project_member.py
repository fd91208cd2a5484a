"""
Project Member Model
"""
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, String, UniqueConstraint
from taskboard.database import Base


class ProjectMember(Base):
    __tablename__ = "project_members"

    id = Column(String(36), primary_key=True)
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    role = Column(String(50), default="member", nullable=False)  # owner, admin, member, viewer
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("project_id", "user_id", name="unique_project_member"),
        CheckConstraint("role IN ('owner', 'admin', 'member', 'viewer')", name="ck_project_members_role"),
    )
