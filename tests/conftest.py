import pytest
from fastapi.testclient import TestClient

from vibefid_server import config
from vibefid_server.utils import db_access


@pytest.fixture
def db(tmp_path, monkeypatch):
    monkeypatch.setattr(db_access, "DB_PATH", tmp_path / "db" / "vibefid.db")
    db_access.init_db()
    return db_access


@pytest.fixture
def log_dir(tmp_path, monkeypatch):
    path = tmp_path / "logs"
    monkeypatch.setattr(config, "LOG_DIR", path)
    return path


@pytest.fixture
def api(db, log_dir):
    from vibefid_server.server import app

    with TestClient(app) as client:
        yield client
