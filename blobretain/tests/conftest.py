import os

import pytest
from loguru import logger

from helpers import BASE_EPOCH


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{level}|{message}")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "STORAGE_PROVIDER",
        "AZURE_STORAGE_CONNECTION_STRING",
        "AZURE_STORAGE_CONTAINER_NAME",
        "STORAGE_LOCAL_ROOT",
        "OUTPUT_DIR",
        "RETENTION_KEEP_COUNT",
        "RETENTION_MIN_GROUP_SIZE",
        "RETENTION_ORDER",
        "LOG_LEVEL",
        "LOG_FILE",
        "LOG_ENABLE_FILE",
        "LOG_MAX_FILE_SIZE",
        "LOG_RETENTION_DAYS",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def storage_root(tmp_path):
    """
    A local storage root with one container, 'assets':

    app.1-4.css   group 'app', earliest, 4 files
    main.*.js     group 'main', 3 files
    logo.*.png    group 'logo', only 2 files
    img/nested.png nested, skipped
    """
    container = tmp_path / "storage" / "assets"
    (container / "img").mkdir(parents=True)
    files = {
        "app.1.css": 10,
        "app.2.css": 20,
        "app.3.css": 30,
        "app.4.css": 40,
        "main.a1.js": 100,
        "main.b2.js": 200,
        "main.c3.js": 300,
        "logo.x.png": 50,
        "logo.y.png": 60,
        "img/nested.png": 5,
    }
    for name, offset in files.items():
        path = container / name
        path.write_text(name, encoding="utf-8")
        os.utime(path, (BASE_EPOCH + offset, BASE_EPOCH + offset))
    return tmp_path / "storage"
