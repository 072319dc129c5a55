from sqlalchemy import BigInteger, Column, DateTime, Integer, String
from portal.core.database import Base
from portal.core.time import utcnow

ROLE_ADMIN = "ADMIN"
ROLE_USER = "USER"
ROLES = (ROLE_USER, ROLE_ADMIN)

DEFAULT_STORAGE_QUOTA = 1024 ** 3  # 1 GiB


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(200), nullable=False)
    email = Column(String(200), nullable=True)
    role = Column(String(20), nullable=False, default=ROLE_USER)  # USER, ADMIN
    department = Column(String(200), nullable=True)
    position = Column(String(200), nullable=True)
    avatar = Column(String(500), nullable=True)
    storage_quota = Column(BigInteger, nullable=False, default=DEFAULT_STORAGE_QUOTA)
    created_at = Column(DateTime, default=utcnow)
