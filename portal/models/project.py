from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from portal.core.database import Base
from portal.core.time import utcnow

PROJECT_VISIBILITIES = ("public", "private", "team")

MEMBER_OWNER = "owner"
MEMBER_ADMIN = "admin"
MEMBER_MEMBER = "member"
MEMBER_VIEWER = "viewer"
MEMBER_ROLES = (MEMBER_OWNER, MEMBER_ADMIN, MEMBER_MEMBER, MEMBER_VIEWER)


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(30), nullable=False, default="active")
    priority = Column(String(20), nullable=False, default="medium")
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    visibility = Column(String(20), nullable=False, default="public")  # public, private, team
    color = Column(String(20), nullable=False, default="#3B82F6")
    is_archived = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class ProjectMember(Base):
    __tablename__ = "project_members"
    __table_args__ = (UniqueConstraint("project_id", "user_id", name="uq_project_members_project_user"),)

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String(20), nullable=False, default=MEMBER_MEMBER)  # owner, admin, member, viewer
    joined_at = Column(DateTime, default=utcnow)
