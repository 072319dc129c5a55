from sqlalchemy import BigInteger, Boolean, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from portal.core.database import Base
from portal.core.time import utcnow

PERMISSION_READ = "READ"
PERMISSION_WRITE = "WRITE"
PERMISSION_OWNER = "OWNER"  # reported to clients, never stored on a share row
SHARE_PERMISSIONS = (PERMISSION_READ, PERMISSION_WRITE)


class Folder(Base):
    __tablename__ = "user_folders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    parent_id = Column(Integer, ForeignKey("user_folders.id", ondelete="CASCADE"), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    is_favorite = Column(Boolean, nullable=False, default=False)
    is_deleted = Column(Boolean, nullable=False, default=False)  # trash flag
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class FolderShare(Base):
    __tablename__ = "folder_shares"
    __table_args__ = (UniqueConstraint("folder_id", "user_id", name="uq_folder_shares_folder_user"),)

    id = Column(Integer, primary_key=True, index=True)
    folder_id = Column(Integer, ForeignKey("user_folders.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    permission = Column(String(10), nullable=False, default=PERMISSION_READ)  # READ, WRITE
    created_at = Column(DateTime, default=utcnow)


class DriveFile(Base):
    __tablename__ = "user_files"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    folder_id = Column(Integer, ForeignKey("user_folders.id", ondelete="CASCADE"), nullable=True, index=True)
    filename = Column(String(500), nullable=False)
    original_name = Column(String(500), nullable=False)
    file_type = Column(String(200), nullable=True)
    file_size = Column(BigInteger, nullable=False, default=0)
    is_favorite = Column(Boolean, nullable=False, default=False)
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
