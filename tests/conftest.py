import sqlite3
from pathlib import Path
from typing import Dict

import pytest
from fastapi.testclient import TestClient

from main import create_app
from portal.core.config import Settings
from portal.core.security import create_access_token
from portal.models.user import DEFAULT_STORAGE_QUOTA

USERS = (
    (1, "alice", "Alice Souza", "USER"),
    (2, "bob", "Bob Lima", "USER"),
    (3, "carol", "Carol Dias", "USER"),
    (4, "dora", "Dora Admin", "ADMIN"),
)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'portal.db'}",
        CREATE_TABLES=True,
        SECRET_KEY="test-secret",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        MAX_UPLOAD_SIZE=1024 * 1024,
        LOG_PATH=str(tmp_path / "logs" / "portal.log"),
        HOLIDAYS_API_URL="https://holidays.test/api/feriados/v1",
    )


def _seed_users(db_path: str) -> None:
    with sqlite3.connect(db_path) as conn:
        conn.executemany(
            "INSERT INTO users (id, username, name, role, storage_quota, created_at) "
            "VALUES (?, ?, ?, ?, ?, '2026-01-01 00:00:00')",
            [(uid, username, name, role, DEFAULT_STORAGE_QUOTA) for uid, username, name, role in USERS],
        )
        conn.commit()


@pytest.fixture
def client(settings: Settings, tmp_path: Path):
    app = create_app(settings)
    with TestClient(app) as test_client:
        _seed_users(str(tmp_path / "portal.db"))
        yield test_client


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    return str(tmp_path / "portal.db")


@pytest.fixture
def auth(settings: Settings):
    def headers(user_id: int) -> Dict[str, str]:
        token = create_access_token({"sub": str(user_id)}, settings)
        return {"Authorization": f"Bearer {token}"}

    return headers


@pytest.fixture
def alice(auth):
    return auth(1)


@pytest.fixture
def bob(auth):
    return auth(2)


@pytest.fixture
def carol(auth):
    return auth(3)


@pytest.fixture
def admin(auth):
    return auth(4)
