from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from portal.core.database import Base
from portal.core.time import utcnow


class UserShortcut(Base):
    __tablename__ = "user_shortcuts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    url = Column(String(1000), nullable=False)
    icon_name = Column(String(50), nullable=False, default="Globe")
    color = Column(String(50), nullable=False, default="bg-indigo-50")
    is_favorite = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow)


class SystemShortcut(Base):
    __tablename__ = "system_shortcuts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    url = Column(String(1000), nullable=False)
    icon_name = Column(String(50), nullable=False, default="Box")
    color = Column(String(50), nullable=False, default="bg-blue-50")
    is_favorite = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow)


class Todo(Base):
    __tablename__ = "todos"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    text = Column(String(500), nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow)


class UserNote(Base):
    __tablename__ = "user_notes"

    id = Column(Integer, primary_key=True, index=True)
    # One note per user
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    content = Column(Text, nullable=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
