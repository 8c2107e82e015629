import logging
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from user_records_api.app.core import config as config_module
from user_records_api.app.core.config import Settings, settings
from user_records_api.app.core.db import build_store
from user_records_api.app.core.logging_config import CONSOLE_HANDLER, FILE_HANDLER, setup_logging
from user_records_api.app.main import create_app
from user_records_api.app.store import InMemoryUserStore, StoreError


def test_build_store_memory():
    assert isinstance(build_store(Settings(store_backend="memory")), InMemoryUserStore)


def test_build_store_unknown_backend():
    with pytest.raises(RuntimeError, match="Unknown STORE_BACKEND"):
        build_store(Settings(store_backend="redis"))


def test_build_store_requires_mongo_uri():
    with pytest.raises(RuntimeError, match="MongoDB URI is not set"):
        build_store(Settings(store_backend="mongo", mongo_uri=""))


@patch("user_records_api.app.core.db.MongoUserStore.connect")
def test_build_store_mongo(connect):
    config = Settings(
        store_backend="mongo",
        mongo_uri="mongodb://db:27017",
        db_name="people",
        collection_name="accounts",
        store_timeout=1.5,
    )

    store = build_store(config)

    assert store is connect.return_value
    connect.assert_called_once_with("mongodb://db:27017", "people", "accounts", timeout=1.5)


@patch("user_records_api.app.core.db.MongoUserStore.connect", side_effect=StoreError("connection refused"))
def test_build_store_mongo_unreachable(connect):
    with pytest.raises(RuntimeError, match="Failed to connect to MongoDB: connection refused"):
        build_store(Settings(store_backend="mongo", mongo_uri="mongodb://db:27017"))


@pytest.mark.parametrize("value, expected", [("", 5000), ("  ", 5000), ("8080", 8080)])
def test_port_falls_back_to_default(monkeypatch, value, expected):
    monkeypatch.setenv("PORT", value)
    assert config_module._port_from_env() == expected


def test_startup_builds_configured_store(monkeypatch):
    monkeypatch.setattr(settings, "store_backend", "memory")

    with TestClient(create_app()) as client:
        created = client.post("/users", json={"name": "Ann"}).json()
        assert client.get(f"/users/{created['id']}").json()["name"] == "Ann"
        assert isinstance(client.app.state.store, InMemoryUserStore)


def test_startup_fails_without_mongo_uri(monkeypatch):
    monkeypatch.setattr(settings, "store_backend", "mongo")
    monkeypatch.setattr(settings, "mongo_uri", "")

    with pytest.raises(RuntimeError, match="MongoDB URI is not set"):
        with TestClient(create_app()):
            pass


@pytest.fixture
def restore_logging():
    level = logging.getLogger().level
    yield
    setup_logging(settings)
    logging.getLogger().setLevel(level)


def test_setup_logging_routes_uvicorn_to_log_file(tmp_path, restore_logging):
    log_file = tmp_path / "api.log"

    setup_logging(Settings(log_level="debug", log_file=str(log_file)))
    logging.getLogger("uvicorn.access").info('127.0.0.1 - "GET /health HTTP/1.1" 200')
    logging.getLogger("user_records_api.tests").debug("debug line")

    for handler in logging.getLogger().handlers:
        handler.flush()
    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert "[INFO] uvicorn.access: 127.0.0.1" in lines[0]
    assert "[DEBUG] user_records_api.tests: debug line" in lines[1]
    assert logging.getLogger("uvicorn.access").propagate


def test_setup_logging_replaces_its_own_handlers(tmp_path, restore_logging):
    setup_logging(Settings(log_level="INFO", log_file=str(tmp_path / "a.log")))
    setup_logging(Settings(log_level="INFO", log_file=str(tmp_path / "b.log")))

    names = [handler.get_name() for handler in logging.getLogger().handlers]
    assert names.count(CONSOLE_HANDLER) == 1
    assert names.count(FILE_HANDLER) == 1
    assert logging.getLogger().level == logging.INFO
